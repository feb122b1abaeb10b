"""
Author Repository

Lookups by name plus the find-or-create operation used whenever a book is
written against an author name.

Find-or-create and concurrent requests
======================================
Two requests can both miss the lookup for a new author name and both try
to insert it. The UNIQUE constraint on ``authors.name`` lets only one
insert succeed. The loser's insert runs inside a SAVEPOINT, so rolling it
back leaves the rest of the request's transaction intact, and a second
lookup returns the row the winner created.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from library_api.models import Author
from library_api.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class AuthorRepository(BaseRepository[Author]):
    """Data access for the authors table."""

    model = Author

    def get_by_name(self, name: str, with_books: bool = False) -> Optional[Author]:
        """Exact-match lookup on the author's name."""
        stmt = select(Author).where(Author.name == name)
        if with_books:
            stmt = stmt.options(selectinload(Author.books))
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, name: str) -> Author:
        """Insert a new author. Raises IntegrityError if the name exists."""
        return self.add(Author(name=name))

    def get_or_create(self, name: str) -> tuple[Author, bool]:
        """
        Return the author called ``name``, creating it if absent.

        Returns:
            (author, created) where created is True only if this call
            inserted the row.

        Raises:
            IntegrityError: if the insert failed for a reason other than a
                concurrent insert of the same name.
        """
        author = self.get_by_name(name)
        if author is not None:
            return author, False

        try:
            with self.db.begin_nested():
                author = Author(name=name)
                self.db.add(author)
                self.db.flush()
        except IntegrityError:
            existing = self.get_by_name(name)
            if existing is None:
                raise
            logger.info(f"Author '{name}' was created concurrently, reusing id={existing.id}")
            return existing, False

        logger.info(f"Created author '{name}' (id={author.id})")
        return author, True

    def rename(self, author: Author, name: str) -> Author:
        """Change an author's name. Raises IntegrityError on a duplicate."""
        author.name = name
        self.db.flush()
        return author
