"""
Shared service helpers.

store_errors wraps a unit of work so that any unexpected SQLAlchemy error
rolls the session back and surfaces as an InternalError (500) carrying
the store's error text. Application errors (ValidationError,
NotFoundError, ...) raised inside the block pass through untouched.

Usage:
    with store_errors(self.db, "Error adding book"):
        ...
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from library_api.exceptions import InternalError

logger = logging.getLogger(__name__)


def describe_store_error(exc: SQLAlchemyError) -> str:
    """
    Best human-readable text for a store failure.

    DBAPIError wraps the driver exception in ``orig``; its message is more
    useful than SQLAlchemy's wrapper, which also embeds the SQL statement.
    """
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def store_errors(db: Session, message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"{message}: {exc}", exc_info=True)
        raise InternalError(message=message, error=describe_store_error(exc)) from exc
