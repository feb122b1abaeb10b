"""
Book Repository

All book queries load the author and genre eagerly with selectinload, so
formatting a list of books never triggers one extra query per row.
"""

from typing import Optional, Sequence

from sqlalchemy import Select, delete, select
from sqlalchemy.orm import selectinload

from library_api.models import Author, Book, Genre
from library_api.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """Data access for the books table."""

    model = Book

    @staticmethod
    def _select_with_associations() -> Select:
        return (
            select(Book)
            .options(selectinload(Book.author), selectinload(Book.genre))
            .order_by(Book.id)
        )

    def get_with_associations(self, book_id: int) -> Optional[Book]:
        """Primary-key lookup with author and genre loaded."""
        stmt = self._select_with_associations().where(Book.id == book_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_title(self, title: str) -> Optional[Book]:
        """
        Exact-match lookup on title, with author and genre loaded.

        Titles are not unique; the oldest book (lowest id) wins.
        """
        stmt = self._select_with_associations().where(Book.title == title).limit(1)
        return self.db.execute(stmt).scalars().first()

    def find(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> Sequence[Book]:
        """
        List books matching every given equality filter.

        - title: filters the books table directly
        - author: filters through the joined author's name
        - genre: filters through the joined genre's name

        With no filters this returns every book.
        """
        stmt = self._select_with_associations()

        if title:
            stmt = stmt.where(Book.title == title)
        if author:
            stmt = stmt.join(Book.author).where(Author.name == author)
        if genre:
            stmt = stmt.join(Book.genre).where(Genre.name == genre)

        return self.db.execute(stmt).scalars().all()

    def list_titles(self) -> Sequence[str]:
        """Every book title, in id order."""
        stmt = select(Book.title).order_by(Book.id)
        return self.db.execute(stmt).scalars().all()

    def create(self, title: str, author: Author, genre: Genre) -> Book:
        """Insert a book linking already-resolved author and genre rows."""
        return self.add(Book(title=title, author=author, genre=genre))

    def update(self, book: Book, title: str, author: Author, genre: Genre) -> Book:
        """Overwrite a book's title and references in place."""
        book.title = title
        book.author = author
        book.genre = genre
        self.db.flush()
        return book

    def delete_all(self) -> int:
        """Delete every book and return the number of rows removed."""
        result = self.db.execute(delete(Book))
        return result.rowcount
