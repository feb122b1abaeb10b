"""
Repositories Package

One repository per entity. Services depend on these instead of building
queries against the ORM models directly.
"""

from library_api.repositories.author import AuthorRepository
from library_api.repositories.book import BookRepository
from library_api.repositories.genre import GenreRepository

__all__ = ["AuthorRepository", "BookRepository", "GenreRepository"]
