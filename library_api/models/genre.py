"""
Genre Model

Represents a book genre/category in the database.

Genres are reference data: a book can only be written against a genre
that already exists. Book operations never create genres.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.book import Book


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    Relationships:
    - books: One-to-Many (a genre contains many books)

    Indexes:
    - Primary key on id (automatic)
    - name: Unique index for preventing duplicate genres
    """

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'SciFi', 'Mystery')"
    )

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

    books: Mapped[List["Book"]] = relationship(
        "Book",
        back_populates="genre",
        order_by="Book.id",
    )

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name='{self.name}')"
