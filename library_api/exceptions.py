"""
Application Exception Hierarchy

Services raise these exceptions; the handlers registered in
``library_api.main`` turn them into the JSON envelope

    {"success": false, "message": "...", "error": ...}

with the status code carried by the exception class.

Exception Hierarchy:
    LibraryAPIError (base)         → 500
    ├── ValidationError            → 400 Bad Request
    ├── NotFoundError              → 404 Not Found
    ├── ConflictError              → 409 Conflict
    └── InternalError              → 500 Internal Server Error

WHY exceptions instead of returning error dicts?
================================================
1. Services stay free of HTTP response building
2. Every error goes through one formatter, so the envelope is consistent
3. Route handlers only deal with the happy path
"""

from typing import Any, Optional

from fastapi import status


class LibraryAPIError(Exception):
    """
    Base exception for all Library API errors.

    Attributes:
        message: Client-facing description, returned as the envelope message
        error:   Optional detail returned in the envelope ``error`` field
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error: Optional[Any] = None,
    ):
        self.message = message
        self.error = error
        super().__init__(message)

    def to_envelope(self) -> dict[str, Any]:
        """Render the error as the response envelope."""
        body: dict[str, Any] = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationError(LibraryAPIError):
    """
    Raised when the client sent a request that can be fixed and resent.

    Missing required fields, or a referenced genre that does not exist on
    update. Uses 400 rather than FastAPI's 422 so every client error looks
    the same.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        error: Optional[Any] = None,
    ):
        super().__init__(message=message, error=error)
        self.field = field


class NotFoundError(LibraryAPIError):
    """Raised when the targeted or referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Resource not found", error: Optional[Any] = None):
        super().__init__(message=message, error=error)


class ConflictError(LibraryAPIError):
    """Raised when an explicit create would duplicate a unique name."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "Resource already exists", error: Optional[Any] = None):
        super().__init__(message=message, error=error)


class InternalError(LibraryAPIError):
    """
    Raised when the data store fails unexpectedly.

    ``error`` carries the store's error text so the caller can see what
    went wrong; the full traceback is logged server-side.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
