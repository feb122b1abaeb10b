"""
Author Pydantic Schemas

Authors are addressed by name in URLs and bodies, matching the book
routes. The field is called ``author`` on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthorWrite(BaseModel):
    """Request body for POST /authors and PUT /authors/{author}."""

    author: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Author's full name",
        examples=["Frank Herbert", "Ursula K. Le Guin"],
    )

    @field_validator("author")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; blank names count as missing."""
        if v is None:
            return None
        return v.strip() or None


class AuthorOut(BaseModel):
    """Author as returned to clients."""

    id: int = Field(..., description="Unique identifier", examples=[1, 42])
    author: str = Field(..., description="Author's full name")

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": 1, "author": "Frank Herbert"}},
    )


class AuthorDetail(AuthorOut):
    """Single author with the titles they wrote."""

    books: list[str] = Field(default_factory=list, description="Titles by this author")


class AuthorUpdateResult(BaseModel):
    """Before/after snapshots returned by PUT /authors/{author}."""

    before_update: AuthorOut = Field(..., alias="beforeUpdate")
    after_update: AuthorOut = Field(..., alias="afterUpdate")

    model_config = ConfigDict(populate_by_name=True)
