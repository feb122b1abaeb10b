"""
pytest Fixtures for Library API Tests

Shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)

Each test runs inside a connection-level transaction that is rolled back
afterwards. The Session joins it with join_transaction_mode
"create_savepoint", so commits and rollbacks issued by the code under test
only touch a SAVEPOINT and never the outer transaction.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from library_api.config import Settings
from library_api.database import Base, build_engine, get_db
from library_api.main import app
from library_api.models import Author, Book, Genre

API = "/api/v1"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    Built by the same build_engine the application uses, so the tests run
    on the production SQLite setup: a StaticPool keeping the in-memory
    database on one connection, and explicit BEGIN for SAVEPOINT support.
    """
    engine = build_engine(Settings(_env_file=None, database_url="sqlite://"))
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    Everything the test (and the app) writes is rolled back afterwards.
    """
    connection = engine.connect()
    transaction = connection.begin()

    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=connection,
        join_transaction_mode="create_savepoint",
    )
    session = TestSessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client wired to the test database.

    get_db is overridden, so every service the routes build uses the
    test session.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# HELPERS
# =============================================================================
@pytest.fixture
def count_rows(db_session: Session):
    """Return a function counting the rows of a model's table."""

    def _count(model) -> int:
        return db_session.scalar(select(func.count()).select_from(model))

    return _count


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_genre(db_session: Session) -> Genre:
    """Create a sample genre for testing."""
    genre = Genre(name="SciFi")
    db_session.add(genre)
    db_session.commit()
    db_session.refresh(genre)
    return genre


@pytest.fixture
def second_genre(db_session: Session) -> Genre:
    genre = Genre(name="Fantasy")
    db_session.add(genre)
    db_session.commit()
    db_session.refresh(genre)
    return genre


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="Frank Herbert")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(
    db_session: Session,
    sample_author: Author,
    sample_genre: Genre,
) -> Book:
    """Create "Dune" by Frank Herbert under SciFi."""
    book = Book(title="Dune", author=sample_author, genre=sample_genre)
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(
    db_session: Session,
    sample_author: Author,
    sample_genre: Genre,
    second_genre: Genre,
) -> list[Book]:
    """
    Five books across two authors and two genres:

        Dune, Children of Dune        Frank Herbert     SciFi
        Foundation                    Isaac Asimov      SciFi
        The Hobbit                    J.R.R. Tolkien    Fantasy
        A Wizard of Earthsea          Ursula K. Le Guin Fantasy
    """
    asimov = Author(name="Isaac Asimov")
    tolkien = Author(name="J.R.R. Tolkien")
    le_guin = Author(name="Ursula K. Le Guin")
    books = [
        Book(title="Dune", author=sample_author, genre=sample_genre),
        Book(title="Children of Dune", author=sample_author, genre=sample_genre),
        Book(title="Foundation", author=asimov, genre=sample_genre),
        Book(title="The Hobbit", author=tolkien, genre=second_genre),
        Book(title="A Wizard of Earthsea", author=le_guin, genre=second_genre),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books
