"""
Book Model

The central model of the Library API, representing books in the database.

Every book references exactly one author and one genre. Both foreign keys
are NOT NULL, so the database itself rejects a book without valid
references.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author
    from library_api.models.genre import Genre


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required, indexed, not unique)
    - author_id: Foreign key to authors.id (required)
    - genre_id: Foreign key to genres.id (required)

    Relationships:
    - author: Many-to-One
    - genre: Many-to-One

    Example:
        book = Book(title="Dune", author=herbert, genre=scifi)
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    # Titles are the lookup key for the /books/{title} routes but two editions
    # may share a title, so the index is not unique.
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    # -------------------------------------------------------------------------
    # Foreign Keys
    # -------------------------------------------------------------------------
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
        comment="Author who wrote the book"
    )

    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genres.id"),
        index=True,
        nullable=False,
        comment="Genre the book belongs to"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    #   book.author  -> Author
    #   author.books -> list of books
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    genre: Mapped["Genre"] = relationship(
        "Genre",
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
