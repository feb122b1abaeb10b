"""
Test Suite for the Library API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_books.py: /api/v1/books endpoints
- test_authors.py: /api/v1/authors endpoints
- test_genres.py: /api/v1/genres endpoints
- test_book_service.py: BookService envelopes and store failures
- test_repositories.py: find-or-create and book queries
- test_main.py: health, error handlers, rate limiting, settings
- test_database.py: engine setup and SQLite transaction behaviour

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=library_api --cov-report=html

    # Run specific test
    pytest tests/test_books.py::TestCreateBook::test_create_book_success
"""
