"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Instead of writing:
    def get_book(title: str, db: Session = Depends(get_db)):
        service = BookService(db)

routes declare:
    def get_book(title: str, service: BookServiceDep):

Tests swap the database by overriding get_db; every service built here
picks the override up automatically.
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from library_api.database import get_db
from library_api.services.author_service import AuthorService
from library_api.services.book_service import BookService
from library_api.services.genre_service import GenreService

DbSession = Annotated[Session, Depends(get_db)]


def get_book_service(db: DbSession) -> BookService:
    return BookService(db)


def get_author_service(db: DbSession) -> AuthorService:
    return AuthorService(db)


def get_genre_service(db: DbSession) -> GenreService:
    return GenreService(db)


BookServiceDep = Annotated[BookService, Depends(get_book_service)]
AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
GenreServiceDep = Annotated[GenreService, Depends(get_genre_service)]


# =============================================================================
# Book Filter Parameters
# =============================================================================
class BookFilterParams:
    """
    Query-string filters for GET /books.

    All filters are exact matches:
        GET /books?author=Frank%20Herbert&genre=SciFi
    """

    def __init__(
        self,
        title: str | None = Query(
            default=None,
            max_length=500,
            description="Exact book title",
            examples=["Dune"],
        ),
        author: str | None = Query(
            default=None,
            max_length=255,
            description="Exact author name",
            examples=["Frank Herbert"],
        ),
        genre: str | None = Query(
            default=None,
            max_length=100,
            description="Exact genre name",
            examples=["SciFi"],
        ),
    ) -> None:
        self.title = title
        self.author = author
        self.genre = genre


BookFilters = Annotated[BookFilterParams, Depends()]
