"""
Base Repository

Shared plumbing for the per-entity repositories: each repository wraps a
SQLAlchemy Session and one model class. Repositories flush but never
commit; the service that owns the request decides when to commit.
"""

from typing import Generic, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Common list/add/delete operations."""

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> Sequence[ModelT]:
        """All rows in insertion (id) order."""
        stmt = select(self.model).order_by(self.model.id)
        return self.db.execute(stmt).scalars().all()

    def add(self, obj: ModelT) -> ModelT:
        """Stage a new entity and flush so its id is assigned."""
        self.db.add(obj)
        self.db.flush()
        return obj

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self.db.flush()
