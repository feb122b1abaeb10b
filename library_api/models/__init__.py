"""
SQLAlchemy Models Package

This package contains all database models for the Library API.

Model Relationships:
- Author -> Book: One-to-Many (an author writes many books)
- Genre -> Book: One-to-Many (a genre contains many books)

Import all models here to:
1. Make them available as: from library_api.models import Book, Author, Genre
2. Ensure Alembic discovers them for migrations
"""

from library_api.models.author import Author
from library_api.models.genre import Genre
from library_api.models.book import Book

__all__ = [
    "Author",
    "Genre",
    "Book",
]
