"""
Book Pydantic Schemas

Request bodies reference the author and genre by *name*; responses flatten
the joined rows into {id, title, author, genre}.

Request fields are all optional at the schema level. A missing title,
genre or author on create is a business-rule failure answered with 400 and
a field-specific message ("Title is required"), which the service raises,
rather than FastAPI's generic 422.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    """Strip whitespace; a blank string counts as not provided."""
    if v is None:
        return None
    v = v.strip()
    return v or None


class BookWrite(BaseModel):
    """
    Request body for POST /books and PUT /books/{title}.

    Example request body:
    {
        "title": "Dune",
        "genre": "SciFi",
        "author": "Frank Herbert"
    }
    """

    title: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Book title",
        examples=["Dune"],
    )

    genre: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Name of an existing genre",
        examples=["SciFi"],
    )

    author: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Author name; created if it does not exist yet",
        examples=["Frank Herbert"],
    )

    @field_validator("title", "genre", "author")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class BookOut(BaseModel):
    """
    Flat book representation returned to clients.

    Produced by ``library_api.services.formatter.format_book`` from a Book
    row with its author and genre loaded.
    """

    id: int = Field(..., description="Unique identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Author name")
    genre: str = Field(..., description="Genre name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "SciFi",
            }
        },
    )


class BookList(BaseModel):
    """Payload of GET /books."""

    books: list[BookOut]


class BookUpdateResult(BaseModel):
    """Before/after snapshots returned by PUT /books/{title}."""

    before_update: BookOut = Field(..., alias="beforeUpdate")
    after_update: BookOut = Field(..., alias="afterUpdate")

    model_config = ConfigDict(populate_by_name=True)


class BooksDeleted(BaseModel):
    """Summary returned by DELETE /books."""

    deleted_count: int = Field(..., alias="deletedCount", ge=0)
    deleted_books: list[BookOut] = Field(..., alias="deletedBooks")

    model_config = ConfigDict(populate_by_name=True)
