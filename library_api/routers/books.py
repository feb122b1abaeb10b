"""
Books Router

CRUD endpoints for books, addressed by title.

    POST   /books           create
    GET    /books           list / filter by title, author, genre
    DELETE /books           delete all
    GET    /books/titles    list titles
    GET    /books/{title}   fetch one
    PUT    /books/{title}   update one
    DELETE /books/{title}   delete one

The handlers only translate HTTP into service calls; status codes and
messages are decided in BookService.
"""

from fastapi import APIRouter, Request, Response

from library_api.config import get_settings
from library_api.dependencies import BookFilters, BookServiceDep
from library_api.routers.responses import render
from library_api.schemas import (
    BookList,
    BookOut,
    BooksDeleted,
    BookUpdateResult,
    BookWrite,
    Envelope,
)
from library_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
        500: {"description": "Data store failure"},
    },
)


@router.post(
    "",
    response_model=Envelope[BookOut],
    status_code=201,
    summary="Create a new book",
    description="Create a book under an existing genre. Unknown authors are created.",
    responses={400: {"description": "Missing title, genre or author"}},
)
@limiter.limit(settings.rate_limit_write)
def create_book(request: Request, book_data: BookWrite, service: BookServiceDep) -> Response:
    """
    Create a new book.

    Example:
        POST /api/v1/books {"title": "Dune", "genre": "SciFi", "author": "Frank Herbert"}
    """
    return render(service.create_book(book_data))


@router.get(
    "",
    response_model=Envelope[BookList],
    summary="List books",
    description="List all books, or only those matching exact title, author or genre.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(request: Request, filters: BookFilters, service: BookServiceDep) -> Response:
    """
    List books with optional filters.

    Examples:
        GET /api/v1/books
        GET /api/v1/books?author=Frank%20Herbert
        GET /api/v1/books?genre=SciFi&title=Dune
    """
    result = service.list_books(
        title=filters.title,
        author=filters.author,
        genre=filters.genre,
        query=dict(request.query_params),
    )
    return render(result)


@router.delete(
    "",
    response_model=Envelope[BooksDeleted],
    summary="Delete all books",
    description="Delete every book. Answers 204 when there was nothing to delete.",
    responses={204: {"description": "No books to delete"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_all_books(request: Request, service: BookServiceDep) -> Response:
    return render(service.delete_all_books(query=dict(request.query_params)))


# /titles must be registered before /{title}, otherwise it would be read
# as a book called "titles".
@router.get(
    "/titles",
    response_model=Envelope[list[str]],
    summary="List book titles",
)
@limiter.limit(settings.rate_limit_default)
def list_titles(request: Request, service: BookServiceDep) -> Response:
    return render(service.list_titles())


@router.get(
    "/{title}",
    response_model=Envelope[BookOut],
    summary="Get a book by title",
)
@limiter.limit(settings.rate_limit_default)
def get_book(request: Request, title: str, service: BookServiceDep) -> Response:
    return render(service.get_book(title))


@router.put(
    "/{title}",
    response_model=Envelope[BookUpdateResult],
    summary="Update a book",
    description=(
        "Update a book's title, genre or author. Omitted fields keep their "
        "current value. Answers 304 when nothing would change."
    ),
    responses={
        304: {"description": "No changes detected"},
        400: {"description": "Genre does not exist"},
    },
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    title: str,
    book_data: BookWrite,
    service: BookServiceDep,
) -> Response:
    return render(service.update_book(title, book_data))


@router.delete(
    "/{title}",
    response_model=Envelope[BookOut],
    summary="Delete a book",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(request: Request, title: str, service: BookServiceDep) -> Response:
    return render(service.delete_book(title))
