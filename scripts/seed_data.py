#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample genres, authors and books for
development.

USAGE:
    python scripts/seed_data.py          # clear existing rows, then seed
    python scripts/seed_data.py --keep   # seed on top of existing rows

Books are written through the repositories, so authors are resolved with
the same find-or-create the API uses.
"""

import argparse

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import Author, Book, Genre
from library_api.repositories import AuthorRepository, BookRepository, GenreRepository

GENRES = ["SciFi", "Fantasy", "Mystery", "Classic Literature", "Dystopian"]

BOOKS = [
    ("Dune", "Frank Herbert", "SciFi"),
    ("Children of Dune", "Frank Herbert", "SciFi"),
    ("Foundation", "Isaac Asimov", "SciFi"),
    ("I, Robot", "Isaac Asimov", "SciFi"),
    ("The Hobbit", "J.R.R. Tolkien", "Fantasy"),
    ("A Wizard of Earthsea", "Ursula K. Le Guin", "Fantasy"),
    ("Murder on the Orient Express", "Agatha Christie", "Mystery"),
    ("Pride and Prejudice", "Jane Austen", "Classic Literature"),
    ("1984", "George Orwell", "Dystopian"),
    ("Animal Farm", "George Orwell", "Dystopian"),
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(Genre))
    db.commit()
    print("Data cleared.")


def create_genres(db: Session) -> dict[str, Genre]:
    print("Creating genres...")
    repo = GenreRepository(db)
    genres = {}
    for name in GENRES:
        genres[name] = repo.get_by_name(name) or repo.create(name)
    db.commit()
    print(f"Created {len(genres)} genres.")
    return genres


def create_books(db: Session, genres: dict[str, Genre]) -> list[Book]:
    """Create sample books, creating their authors on the way."""
    print("Creating books...")
    authors = AuthorRepository(db)
    books = BookRepository(db)

    created = []
    for title, author_name, genre_name in BOOKS:
        author, _ = authors.get_or_create(author_name)
        created.append(books.create(title, author, genres[genre_name]))

    db.commit()
    print(f"Created {len(created)} books.")
    return created


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        genres = create_genres(db)
        books = create_books(db, genres)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Genres: {len(genres)}")
        print(f"  - Books: {len(books)}")
        print("\nYou can now access the API at http://localhost:8001")
        print("API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the library database")
    parser.add_argument("--keep", action="store_true", help="Do not clear existing rows first")
    args = parser.parse_args()
    seed_database(clear_existing=not args.keep)
