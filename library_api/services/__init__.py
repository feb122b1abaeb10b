"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- book_service.py: Book create/list/fetch/update/delete orchestration
- author_service.py: Author CRUD
- genre_service.py: Genre create/list/fetch
- formatter.py: Flattens book rows into {id, title, author, genre}
- base.py: Store-error wrapping shared by the services
- rate_limiter.py: Rate limiting with slowapi
"""
