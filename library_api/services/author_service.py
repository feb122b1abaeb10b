"""
Author Service

Simple CRUD for the /authors routes. Authors are addressed by name.
Deleting authors is not offered: books always need one.
"""

import logging

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.exceptions import ConflictError, NotFoundError, ValidationError
from library_api.models import Author
from library_api.repositories import AuthorRepository
from library_api.schemas import (
    AuthorDetail,
    AuthorOut,
    AuthorUpdateResult,
    AuthorWrite,
    Envelope,
    ServiceResult,
)
from library_api.services.base import store_errors

logger = logging.getLogger(__name__)


def format_author(author: Author) -> AuthorOut:
    return AuthorOut(id=author.id, author=author.name)


class AuthorService:
    """Create, list, fetch and rename authors."""

    def __init__(self, db: Session):
        self.db = db
        self.authors = AuthorRepository(db)

    def create_author(self, data: AuthorWrite) -> ServiceResult[AuthorOut]:
        """
        Create an author explicitly.

        Raises:
            ValidationError: name missing
            ConflictError: an author with that name already exists
        """
        if data.author is None:
            raise ValidationError("Author is required", field="author")

        with store_errors(self.db, "Error adding author"):
            if self.authors.get_by_name(data.author) is not None:
                raise ConflictError(f"Author {data.author} already exists")
            try:
                author = self.authors.create(data.author)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise ConflictError(f"Author {data.author} already exists")
            created = format_author(author)

        logger.info(f"Author created: id={created.id} name='{created.author}'")
        return ServiceResult(
            status_code=status.HTTP_201_CREATED,
            envelope=Envelope(success=True, message=f"{created.author} was added", data=created),
        )

    def list_authors(self) -> ServiceResult[list[AuthorOut]]:
        with store_errors(self.db, "Error getting authors"):
            authors = [format_author(a) for a in self.authors.list_all()]

        if not authors:
            raise NotFoundError("No authors found")

        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(success=True, message="All authors", data=authors),
        )

    def get_author(self, name: str) -> ServiceResult[AuthorDetail]:
        """Fetch one author with the titles they wrote."""
        with store_errors(self.db, "Error fetching author"):
            author = self.authors.get_by_name(name, with_books=True)
            if author is None:
                raise NotFoundError("Author not found")
            detail = AuthorDetail(
                id=author.id,
                author=author.name,
                books=[book.title for book in author.books],
            )

        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(success=True, message="Single author fetched successfully", data=detail),
        )

    def update_author(self, name: str, data: AuthorWrite) -> ServiceResult[AuthorUpdateResult]:
        """
        Rename an author.

        Returns 304 when the new name equals the current one.

        Raises:
            NotFoundError: no author has that name
            ValidationError: new name missing
            ConflictError: another author already has the new name
        """
        with store_errors(self.db, "Error updating author"):
            author = self.authors.get_by_name(name)
            if author is None:
                raise NotFoundError("Author not found")
            if data.author is None:
                raise ValidationError("Author is required", field="author")

            before = format_author(author)
            if data.author == before.author:
                return ServiceResult(
                    status_code=status.HTTP_304_NOT_MODIFIED,
                    envelope=Envelope(
                        success=False,
                        message="No changes detected. Author not updated.",
                        data=AuthorUpdateResult(before_update=before, after_update=before),
                    ),
                )

            try:
                self.authors.rename(author, data.author)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise ConflictError(f"Author {data.author} already exists")
            after = format_author(author)

        logger.info(f"Author renamed: id={after.id} '{before.author}' -> '{after.author}'")
        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(
                success=True,
                message="Author updated successfully",
                data=AuthorUpdateResult(before_update=before, after_update=after),
            ),
        )
