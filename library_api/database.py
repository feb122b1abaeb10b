"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Library API.

We use SYNCHRONOUS SQLAlchemy with plain ``def`` route handlers. FastAPI
runs those handlers in its threadpool, so each request still runs its
queries one after another without blocking the event loop.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Services commit on success, roll back on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection (get_db).
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.config import Settings, get_settings

settings = get_settings()


SQLITE_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def _use_explicit_sqlite_transactions(engine: Engine) -> None:
    """
    Let SQLAlchemy emit BEGIN itself on SQLite connections.

    pysqlite delays BEGIN until the first DML statement. A SAVEPOINT issued
    before that opens the transaction on its own, and releasing it commits,
    so a find-or-create insert would survive a later rollback.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(config: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    SQLite connections are bound to the thread that opened them unless
    check_same_thread is disabled, and SQLite has no use for pool sizing.
    An in-memory database lives on a single shared connection (StaticPool).
    Server databases get a sized pool with pre-ping so stale connections
    are replaced transparently.
    """
    kwargs: dict[str, Any] = {"echo": config.debug}

    if config.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if config.database_url in SQLITE_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=True,
        )

    engine = create_engine(config.database_url, **kwargs)
    if config.is_sqlite:
        _use_explicit_sqlite_transactions(engine)
    return engine


# =============================================================================
# Database Engine
# =============================================================================
engine = build_engine(settings)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: services decide when to commit
# - autoflush=False: no implicit flush before queries
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    The Base class:
    1. Provides the SQLAlchemy mapper registry
    2. Enables table/model relationship tracking
    3. Is used by Alembic to discover models for migrations
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route handler uses it, and
    the finally block closes it even if the handler raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Handy for development and the seed script. Production deployments
    should run ``alembic upgrade head`` instead.
    """
    # Models must be imported so they register on Base.metadata
    import library_api.models  # noqa: F401

    Base.metadata.create_all(bind=engine)

