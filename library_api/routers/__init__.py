"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- books.py: /api/v1/books/* endpoints
- authors.py: /api/v1/authors/* endpoints
- genres.py: /api/v1/genres/* endpoints
- responses.py: renders service results (envelope + status code)

Each router is imported and registered in main.py.
"""

from library_api.routers.authors import router as authors_router
from library_api.routers.books import router as books_router
from library_api.routers.genres import router as genres_router

__all__ = [
    "books_router",
    "authors_router",
    "genres_router",
]
