"""
Genre Service

Genres must exist before books can be filed under them, so this service
offers create, list and fetch. There is no update or delete: existing
books depend on genre rows.
"""

import logging

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.exceptions import ConflictError, NotFoundError, ValidationError
from library_api.repositories import GenreRepository
from library_api.schemas import Envelope, GenreDetail, GenreOut, GenreWrite, ServiceResult
from library_api.services.base import store_errors

logger = logging.getLogger(__name__)


class GenreService:
    """Create, list and fetch genres."""

    def __init__(self, db: Session):
        self.db = db
        self.genres = GenreRepository(db)

    def create_genre(self, data: GenreWrite) -> ServiceResult[GenreOut]:
        if data.genre is None:
            raise ValidationError("Genre is required", field="genre")

        with store_errors(self.db, "Error adding genre"):
            if self.genres.get_by_name(data.genre) is not None:
                raise ConflictError(f"Genre {data.genre} already exists")
            try:
                genre = self.genres.create(data.genre)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise ConflictError(f"Genre {data.genre} already exists")
            created = GenreOut(id=genre.id, genre=genre.name)

        logger.info(f"Genre created: id={created.id} name='{created.genre}'")
        return ServiceResult(
            status_code=status.HTTP_201_CREATED,
            envelope=Envelope(success=True, message=f"{created.genre} was added", data=created),
        )

    def list_genres(self) -> ServiceResult[list[GenreOut]]:
        with store_errors(self.db, "Error getting genres"):
            genres = [GenreOut(id=g.id, genre=g.name) for g in self.genres.list_all()]

        if not genres:
            raise NotFoundError("No genres found")

        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(success=True, message="All genres", data=genres),
        )

    def get_genre(self, name: str) -> ServiceResult[GenreDetail]:
        with store_errors(self.db, "Error fetching genre"):
            genre = self.genres.get_by_name(name, with_books=True)
            if genre is None:
                raise NotFoundError("Genre not found")
            detail = GenreDetail(
                id=genre.id,
                genre=genre.name,
                books=[book.title for book in genre.books],
            )

        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(success=True, message="Single genre fetched successfully", data=detail),
        )
