"""
Author Model

Represents an author in the library database.

Authors are created either explicitly (POST /authors) or implicitly the
first time a book is written with an unknown author name. The UNIQUE
constraint on ``name`` is what makes the implicit path safe when two
requests race to create the same author.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

# TYPE_CHECKING is True only during type checking (mypy, IDE)
# This prevents circular imports at runtime while enabling type hints
if TYPE_CHECKING:
    from library_api.models.book import Book


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - books: One-to-Many (an author writes many books, a book has one author)

    Indexes:
    - Primary key on id (automatic)
    - name: Unique index, the natural key used by every lookup

    Example:
        author = Author(name="Frank Herbert")
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    # unique=True creates a UNIQUE constraint; find-or-create relies on it
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    #   author.books  # Get all books by this author
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
        order_by="Book.id",
    )

    def __repr__(self) -> str:
        """
        Developer-friendly string representation.

            >>> Author(id=1, name="Frank Herbert")
            Author(id=1, name='Frank Herbert')
        """
        return f"Author(id={self.id}, name='{self.name}')"
