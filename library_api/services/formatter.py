"""
Response formatting for book rows.

Every response that carries book data goes through format_book, so the
{id, title, author, genre} shape is defined in exactly one place.
"""

from typing import Iterable

from library_api.models import Book
from library_api.schemas import BookOut


def format_book(book: Book) -> BookOut:
    """Flatten a Book row (author and genre loaded) into a BookOut."""
    return BookOut(
        id=book.id,
        title=book.title,
        author=book.author.name,
        genre=book.genre.name,
    )


def format_books(books: Iterable[Book]) -> list[BookOut]:
    return [format_book(book) for book in books]
