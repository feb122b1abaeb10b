"""
Authors Router

CRUD endpoints for authors, addressed by name.
Follows the same patterns as the books router.
"""

from fastapi import APIRouter, Request, Response

from library_api.config import get_settings
from library_api.dependencies import AuthorServiceDep
from library_api.routers.responses import render
from library_api.schemas import (
    AuthorDetail,
    AuthorOut,
    AuthorUpdateResult,
    AuthorWrite,
    Envelope,
)
from library_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        404: {"description": "Author not found"},
    },
)


@router.post(
    "",
    response_model=Envelope[AuthorOut],
    status_code=201,
    summary="Create a new author",
    responses={409: {"description": "Author already exists"}},
)
@limiter.limit(settings.rate_limit_write)
def create_author(request: Request, author_data: AuthorWrite, service: AuthorServiceDep) -> Response:
    """Create a new author."""
    return render(service.create_author(author_data))


@router.get(
    "",
    response_model=Envelope[list[AuthorOut]],
    summary="List all authors",
)
@limiter.limit(settings.rate_limit_default)
def list_authors(request: Request, service: AuthorServiceDep) -> Response:
    """List all authors."""
    return render(service.list_authors())


@router.get(
    "/{author}",
    response_model=Envelope[AuthorDetail],
    summary="Get an author by name",
)
@limiter.limit(settings.rate_limit_default)
def get_author(request: Request, author: str, service: AuthorServiceDep) -> Response:
    """Get a single author and the titles they wrote."""
    return render(service.get_author(author))


@router.put(
    "/{author}",
    response_model=Envelope[AuthorUpdateResult],
    summary="Rename an author",
    responses={
        304: {"description": "No changes detected"},
        409: {"description": "Another author already has that name"},
    },
)
@limiter.limit(settings.rate_limit_write)
def update_author(
    request: Request,
    author: str,
    author_data: AuthorWrite,
    service: AuthorServiceDep,
) -> Response:
    """Update an existing author."""
    return render(service.update_author(author, author_data))
