"""
Book Service

Business logic behind the /books routes. Each operation is a handful of
lookups followed by at most one mutation, committed before the result is
returned.

Operations and their outcomes:

    create_book      201 | 400 missing field | 404 unknown genre
    list_books       200 | 404 nothing matched
    list_titles      200 | 404 no books
    get_book         200 | 404
    update_book      200 | 304 nothing changed | 400 unknown genre | 404
    delete_book      200 | 404
    delete_all_books 200 | 204 nothing to delete

Any unexpected store failure becomes InternalError (500).

Genres are never created here; authors are resolved with find-or-create
(see AuthorRepository.get_or_create).
"""

import logging
from typing import Optional

from fastapi import status
from sqlalchemy.orm import Session

from library_api.exceptions import NotFoundError, ValidationError
from library_api.repositories import AuthorRepository, BookRepository, GenreRepository
from library_api.schemas import (
    BookList,
    BookOut,
    BooksDeleted,
    BookUpdateResult,
    BookWrite,
    Envelope,
    ServiceResult,
)
from library_api.services.base import store_errors
from library_api.services.formatter import format_book, format_books

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "genre", "author")


class BookService:
    """
    Orchestrates book reads and writes over the three repositories.

    The service is created per request with that request's session, so it
    holds no state shared between requests.
    """

    def __init__(self, db: Session):
        self.db = db
        self.books = BookRepository(db)
        self.authors = AuthorRepository(db)
        self.genres = GenreRepository(db)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------
    def create_book(self, data: BookWrite) -> ServiceResult[BookOut]:
        """
        Create a book from a title, an existing genre name and an author name.

        The author is created if it does not exist yet. The created book is
        returned in every case, whether or not the author was new.

        Raises:
            ValidationError: title, genre or author missing (checked in that order)
            NotFoundError: the genre does not exist
            InternalError: store failure
        """
        for field in REQUIRED_FIELDS:
            if getattr(data, field) is None:
                raise ValidationError(f"{field.capitalize()} is required", field=field)

        with store_errors(self.db, "Error adding book"):
            genre = self.genres.get_by_name(data.genre)
            if genre is None:
                raise NotFoundError(
                    f"Genre {data.genre} not found. Genre needs to already exist"
                )

            author, _ = self.authors.get_or_create(data.author)
            book = self.books.create(data.title, author, genre)
            created = format_book(book)
            self.db.commit()

        logger.info(f"Book created: id={created.id} title='{created.title}'")
        return ServiceResult(
            status_code=status.HTTP_201_CREATED,
            envelope=Envelope(
                success=True,
                message=f"{created.title} was added",
                data=created,
            ),
        )

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------
    def list_books(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        genre: Optional[str] = None,
        query: Optional[dict[str, str]] = None,
    ) -> ServiceResult[BookList]:
        """
        List books, optionally filtered by exact title, author name or genre name.

        Args:
            title, author, genre: equality filters; None means "any"
            query: the raw query-string parameters, echoed back to the client

        Raises:
            NotFoundError: nothing matched
        """
        query = query or {}

        with store_errors(self.db, "Error getting books"):
            books = self.books.find(title=title, author=author, genre=genre)
            if not books:
                logger.debug(f"No books matched filters {query}")
                raise NotFoundError("No books found")
            formatted = format_books(books)

        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(
                success=True,
                message="Filtered books" if query else "All books",
                query=query,
                data=BookList(books=formatted),
            ),
        )

    def list_titles(self) -> ServiceResult[list[str]]:
        """Every book title in insertion order."""
        with store_errors(self.db, "Error fetching titles"):
            titles = list(self.books.list_titles())

        if not titles:
            raise NotFoundError("No titles found")

        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(
                success=True,
                message="Titles fetched successfully",
                data=titles,
            ),
        )

    def get_book(self, title: str) -> ServiceResult[BookOut]:
        """Fetch a single book by exact title."""
        with store_errors(self.db, "Error fetching book"):
            book = self.books.get_by_title(title)
            if book is None:
                raise NotFoundError("Book not found")
            formatted = format_book(book)

        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(
                success=True,
                message="Single book fetched successfully",
                data=formatted,
            ),
        )

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------
    def update_book(self, path_title: str, data: BookWrite) -> ServiceResult[BookUpdateResult]:
        """
        Update the book currently titled ``path_title``.

        Fields omitted from ``data`` keep the book's current value. The genre
        must exist; the author is created if it does not. When title, author
        and genre all match the stored book, nothing is written and the
        result is 304 with identical before/after snapshots.

        Raises:
            NotFoundError: no book has that title
            ValidationError: the genre does not exist
        """
        with store_errors(self.db, "Error updating book"):
            current = self.books.get_by_title(path_title)
            if current is None:
                raise NotFoundError("Book not found")
            before = format_book(current)

            new_title = data.title or before.title
            genre_name = data.genre or before.genre
            author_name = data.author or before.author

            genre = self.genres.get_by_name(genre_name)
            if genre is None:
                raise ValidationError("Invalid genre", field="genre")

            if (new_title, author_name, genre_name) == (before.title, before.author, before.genre):
                logger.debug(f"Update of '{path_title}' is a no-op")
                return ServiceResult(
                    status_code=status.HTTP_304_NOT_MODIFIED,
                    envelope=Envelope(
                        success=False,
                        message="No changes detected. Book not updated.",
                        data=BookUpdateResult(before_update=before, after_update=before),
                    ),
                )

            author, _ = self.authors.get_or_create(author_name)
            self.books.update(current, title=new_title, author=author, genre=genre)
            self.db.commit()

            updated = self.books.get_with_associations(before.id)
            if updated is None:
                # Deleted by another request after our commit
                raise NotFoundError("Book not found")
            after = format_book(updated)

        logger.info(f"Book updated: id={after.id} '{before.title}' -> '{after.title}'")
        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(
                success=True,
                message="Book updated successfully",
                data=BookUpdateResult(before_update=before, after_update=after),
            ),
        )

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------
    def delete_book(self, title: str) -> ServiceResult[BookOut]:
        """Delete the book with this exact title and return what was deleted."""
        with store_errors(self.db, "Error deleting book"):
            book = self.books.get_by_title(title)
            if book is None:
                raise NotFoundError("Book not found")
            deleted = format_book(book)
            self.books.delete(book)
            self.db.commit()

        logger.info(f"Book deleted: id={deleted.id} title='{deleted.title}'")
        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(
                success=True,
                message="Single book deleted successfully",
                data=deleted,
            ),
        )

    def delete_all_books(
        self, query: Optional[dict[str, str]] = None
    ) -> ServiceResult[BooksDeleted]:
        """
        Delete every book.

        Returns 204 when there was nothing to delete, otherwise 200 with the
        number of deleted rows and a snapshot of the books taken beforehand.
        """
        with store_errors(self.db, "Error deleting books"):
            books = self.books.find()
            if not books:
                return ServiceResult(
                    status_code=status.HTTP_204_NO_CONTENT,
                    envelope=Envelope(success=False, message="No books found to delete."),
                )

            snapshot = format_books(books)
            count = self.books.delete_all()
            self.db.commit()

        logger.info(f"Bulk delete removed {count} books")
        return ServiceResult(
            status_code=status.HTTP_200_OK,
            envelope=Envelope(
                success=True,
                message=f"{count} books deleted.",
                query=query or {},
                data=BooksDeleted(deleted_count=count, deleted_books=snapshot),
            ),
        )
