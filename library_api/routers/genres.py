"""
Genres Router

Genres are reference data: they can be created and read, and books can
only be filed under a genre that already exists.
"""

from fastapi import APIRouter, Request, Response

from library_api.config import get_settings
from library_api.dependencies import GenreServiceDep
from library_api.routers.responses import render
from library_api.schemas import Envelope, GenreDetail, GenreOut, GenreWrite
from library_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/genres",
    tags=["Genres"],
    responses={
        404: {"description": "Genre not found"},
    },
)


@router.post(
    "",
    response_model=Envelope[GenreOut],
    status_code=201,
    summary="Create a new genre",
    responses={409: {"description": "Genre already exists"}},
)
@limiter.limit(settings.rate_limit_write)
def create_genre(request: Request, genre_data: GenreWrite, service: GenreServiceDep) -> Response:
    """
    Create a new genre.

    Genre names must be unique. If a genre with the same name exists,
    a 409 Conflict error is returned.
    """
    return render(service.create_genre(genre_data))


@router.get(
    "",
    response_model=Envelope[list[GenreOut]],
    summary="List all genres",
)
@limiter.limit(settings.rate_limit_default)
def list_genres(request: Request, service: GenreServiceDep) -> Response:
    """List all genres."""
    return render(service.list_genres())


@router.get(
    "/{genre}",
    response_model=Envelope[GenreDetail],
    summary="Get a genre by name",
)
@limiter.limit(settings.rate_limit_default)
def get_genre(request: Request, genre: str, service: GenreServiceDep) -> Response:
    """Get a single genre and the titles filed under it."""
    return render(service.get_genre(genre))
