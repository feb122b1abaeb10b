"""
Genre Repository

Genres are reference data; books only ever look them up.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from library_api.models import Genre
from library_api.repositories.base import BaseRepository


class GenreRepository(BaseRepository[Genre]):
    """Data access for the genres table."""

    model = Genre

    def get_by_name(self, name: str, with_books: bool = False) -> Optional[Genre]:
        """Exact-match lookup on the genre name."""
        stmt = select(Genre).where(Genre.name == name)
        if with_books:
            stmt = stmt.options(selectinload(Genre.books))
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, name: str) -> Genre:
        """Insert a new genre. Raises IntegrityError if the name exists."""
        return self.add(Genre(name=name))
