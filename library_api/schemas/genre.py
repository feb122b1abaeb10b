"""
Genre Pydantic Schemas

Schemas for genre-related API operations.
Follows the same pattern as Author schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GenreWrite(BaseModel):
    """Request body for POST /genres."""

    genre: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Genre name",
        examples=["SciFi", "Mystery", "Romance"],
    )

    @field_validator("genre")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class GenreOut(BaseModel):
    """Genre as returned to clients."""

    id: int = Field(..., description="Unique identifier")
    genre: str = Field(..., description="Genre name")


class GenreDetail(GenreOut):
    """Single genre with the titles filed under it."""

    books: list[str] = Field(default_factory=list, description="Titles in this genre")
