"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

Schema Naming Convention:
- XxxWrite: Request body for create/update
- XxxOut: Flat representation returned to clients
- XxxDetail: Single-entity view with related titles
- XxxUpdateResult: before/after snapshots for updates
- Envelope: The {success, message, data|error} wrapper
"""

from library_api.schemas.author import (
    AuthorDetail,
    AuthorOut,
    AuthorUpdateResult,
    AuthorWrite,
)
from library_api.schemas.book import (
    BookList,
    BookOut,
    BooksDeleted,
    BookUpdateResult,
    BookWrite,
)
from library_api.schemas.envelope import Envelope, ServiceResult
from library_api.schemas.genre import GenreDetail, GenreOut, GenreWrite

__all__ = [
    # Envelope
    "Envelope",
    "ServiceResult",
    # Author schemas
    "AuthorWrite",
    "AuthorOut",
    "AuthorDetail",
    "AuthorUpdateResult",
    # Genre schemas
    "GenreWrite",
    "GenreOut",
    "GenreDetail",
    # Book schemas
    "BookWrite",
    "BookOut",
    "BookList",
    "BookUpdateResult",
    "BooksDeleted",
]
