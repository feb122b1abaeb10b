"""
Tests for Books API Endpoints

This module tests every /api/v1/books endpoint end to end: HTTP status,
response envelope and the resulting database state.

TEST NAMING CONVENTION:
- test_<action>_<scenario>
- Examples: test_create_book_success, test_get_book_not_found
"""

import pytest
from fastapi import status

from library_api.models import Author, Book, Genre

BOOKS = "/api/v1/books"


class TestCreateBook:
    """Tests for POST /api/v1/books endpoint."""

    def test_create_book_success(self, client, sample_genre, sample_author, count_rows):
        """Creating a book with an existing author returns the flattened book."""
        response = client.post(
            BOOKS,
            json={"title": "Dune", "genre": "SciFi", "author": "Frank Herbert"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Dune was added"
        assert body["data"]["title"] == "Dune"
        assert body["data"]["author"] == "Frank Herbert"
        assert body["data"]["genre"] == "SciFi"
        assert isinstance(body["data"]["id"], int)
        assert "error" not in body
        assert count_rows(Author) == 1

    def test_create_book_creates_new_author(self, client, db_session, sample_genre, count_rows):
        """An unknown author is created exactly once alongside the book."""
        response = client.post(
            BOOKS,
            json={"title": "Foundation", "genre": "SciFi", "author": "Isaac Asimov"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["author"] == "Isaac Asimov"
        assert count_rows(Author) == 1
        assert count_rows(Book) == 1

        book = db_session.query(Book).one()
        assert book.author.name == "Isaac Asimov"
        assert book.genre.name == "SciFi"

    def test_create_book_reuses_author_for_second_book(self, client, sample_genre, count_rows):
        """Two books by a new author share one author row."""
        for title in ("Dune", "Dune Messiah"):
            response = client.post(
                BOOKS,
                json={"title": title, "genre": "SciFi", "author": "Frank Herbert"},
            )
            assert response.status_code == status.HTTP_201_CREATED

        assert count_rows(Author) == 1
        assert count_rows(Book) == 2

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"genre": "SciFi", "author": "Frank Herbert"}, "Title is required"),
            ({"title": "Dune", "author": "Frank Herbert"}, "Genre is required"),
            ({"title": "Dune", "genre": "SciFi"}, "Author is required"),
            ({}, "Title is required"),
            ({"title": "   ", "genre": "SciFi", "author": "Frank Herbert"}, "Title is required"),
        ],
    )
    def test_create_book_missing_field(self, client, sample_genre, count_rows, payload, message):
        """Missing fields are reported in title, genre, author order and nothing is stored."""
        response = client.post(BOOKS, json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["message"] == message
        assert "data" not in body
        assert count_rows(Book) == 0
        assert count_rows(Author) == 0

    def test_create_book_unknown_genre(self, client, count_rows):
        """A genre that does not exist is never created implicitly."""
        response = client.post(
            BOOKS,
            json={"title": "Dune", "genre": "Space Opera", "author": "Frank Herbert"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Genre Space Opera not found. Genre needs to already exist"
        assert count_rows(Book) == 0
        assert count_rows(Author) == 0
        assert count_rows(Genre) == 0

    def test_create_book_title_too_long(self, client, sample_genre):
        """Schema violations are answered with 400 and the validation details."""
        response = client.post(
            BOOKS,
            json={"title": "x" * 501, "genre": "SciFi", "author": "Frank Herbert"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid request"
        assert body["error"][0]["loc"] == ["body", "title"]

    def test_create_book_malformed_json(self, client):
        response = client.post(
            BOOKS,
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["success"] is False


class TestListBooks:
    """Tests for GET /api/v1/books endpoint."""

    def test_list_books_empty(self, client):
        """An empty library answers 404 rather than an empty list."""
        response = client.get(BOOKS)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "No books found"

    def test_list_books_all(self, client, multiple_books):
        """Without filters every book is returned in insertion order."""
        response = client.get(BOOKS)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "All books"
        assert body["query"] == {}
        titles = [book["title"] for book in body["data"]["books"]]
        assert titles == [book.title for book in multiple_books]

    def test_list_books_filter_by_author(self, client, multiple_books):
        response = client.get(BOOKS, params={"author": "Frank Herbert"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Filtered books"
        assert body["query"] == {"author": "Frank Herbert"}
        assert [b["title"] for b in body["data"]["books"]] == ["Dune", "Children of Dune"]

    def test_list_books_filter_by_genre(self, client, multiple_books):
        response = client.get(BOOKS, params={"genre": "Fantasy"})

        assert response.status_code == status.HTTP_200_OK
        books = response.json()["data"]["books"]
        assert {b["title"] for b in books} == {"The Hobbit", "A Wizard of Earthsea"}
        assert all(b["genre"] == "Fantasy" for b in books)

    def test_list_books_combined_filters(self, client, multiple_books):
        """Filters are combined with AND."""
        response = client.get(BOOKS, params={"genre": "SciFi", "title": "Foundation"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["query"] == {"genre": "SciFi", "title": "Foundation"}
        assert body["data"]["books"] == [
            {
                "id": multiple_books[2].id,
                "title": "Foundation",
                "author": "Isaac Asimov",
                "genre": "SciFi",
            }
        ]

    def test_list_books_filter_no_match(self, client, multiple_books):
        response = client.get(BOOKS, params={"genre": "Fantasy", "author": "Frank Herbert"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "No books found"

    def test_list_books_filter_is_case_sensitive(self, client, multiple_books):
        response = client.get(BOOKS, params={"title": "dune"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestListTitles:
    """Tests for GET /api/v1/books/titles endpoint."""

    def test_list_titles(self, client, multiple_books):
        response = client.get(f"{BOOKS}/titles")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Titles fetched successfully"
        assert body["data"] == [book.title for book in multiple_books]

    def test_list_titles_empty(self, client):
        response = client.get(f"{BOOKS}/titles")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "No titles found"


class TestGetBook:
    """Tests for GET /api/v1/books/{title} endpoint."""

    def test_get_book_success(self, client, sample_book):
        response = client.get(f"{BOOKS}/Dune")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Single book fetched successfully"
        assert body["data"] == {
            "id": sample_book.id,
            "title": "Dune",
            "author": "Frank Herbert",
            "genre": "SciFi",
        }

    def test_get_book_title_with_spaces(self, client, multiple_books):
        response = client.get(f"{BOOKS}/Children of Dune")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["title"] == "Children of Dune"

    def test_get_book_not_found(self, client, sample_book):
        response = client.get(f"{BOOKS}/Neuromancer")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Book not found"


class TestUpdateBook:
    """Tests for PUT /api/v1/books/{title} endpoint."""

    def test_update_book_title(self, client, sample_book):
        """Renaming returns before/after snapshots and frees the old title."""
        response = client.put(
            f"{BOOKS}/Dune",
            json={"title": "Dune Messiah", "genre": "SciFi", "author": "Frank Herbert"},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Book updated successfully"
        assert body["data"]["beforeUpdate"]["title"] == "Dune"
        assert body["data"]["afterUpdate"]["title"] == "Dune Messiah"
        assert body["data"]["afterUpdate"]["id"] == sample_book.id

        assert client.get(f"{BOOKS}/Dune").status_code == status.HTTP_404_NOT_FOUND
        assert client.get(f"{BOOKS}/Dune Messiah").status_code == status.HTTP_200_OK

    def test_update_book_new_author(self, client, sample_book, count_rows):
        """An unknown author on update is created like on create."""
        response = client.put(f"{BOOKS}/Dune", json={"author": "Brian Herbert"})

        assert response.status_code == status.HTTP_200_OK
        after = response.json()["data"]["afterUpdate"]
        assert after == {
            "id": sample_book.id,
            "title": "Dune",
            "author": "Brian Herbert",
            "genre": "SciFi",
        }
        assert count_rows(Author) == 2

    def test_update_book_genre(self, client, sample_book, second_genre):
        response = client.put(f"{BOOKS}/Dune", json={"genre": "Fantasy"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["beforeUpdate"]["genre"] == "SciFi"
        assert data["afterUpdate"]["genre"] == "Fantasy"

    def test_update_book_no_changes(self, client, db_session, sample_book):
        """An identical update is answered 304 with no body and writes nothing."""
        updated_at = sample_book.updated_at

        response = client.put(
            f"{BOOKS}/Dune",
            json={"title": "Dune", "genre": "SciFi", "author": "Frank Herbert"},
        )

        assert response.status_code == status.HTTP_304_NOT_MODIFIED
        assert response.content == b""

        db_session.refresh(sample_book)
        assert sample_book.title == "Dune"
        assert sample_book.updated_at == updated_at

    def test_update_book_empty_body_is_no_change(self, client, sample_book):
        response = client.put(f"{BOOKS}/Dune", json={})

        assert response.status_code == status.HTTP_304_NOT_MODIFIED

    def test_update_book_unknown_genre(self, client, sample_book, count_rows):
        response = client.put(f"{BOOKS}/Dune", json={"genre": "Poetry", "author": "Someone"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid genre"
        assert count_rows(Author) == 1

    def test_update_book_not_found(self, client, sample_genre):
        response = client.put(
            f"{BOOKS}/Neuromancer",
            json={"title": "Count Zero", "genre": "SciFi", "author": "William Gibson"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Book not found"


class TestDeleteBook:
    """Tests for DELETE /api/v1/books/{title} endpoint."""

    def test_delete_book_success(self, client, sample_book, count_rows):
        response = client.delete(f"{BOOKS}/Dune")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Single book deleted successfully"
        assert body["data"]["title"] == "Dune"
        assert count_rows(Book) == 0
        # The author and genre stay
        assert count_rows(Author) == 1
        assert count_rows(Genre) == 1

        assert client.get(f"{BOOKS}/Dune").status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book_not_found(self, client):
        response = client.delete(f"{BOOKS}/Dune")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Book not found"


class TestDeleteAllBooks:
    """Tests for DELETE /api/v1/books endpoint."""

    def test_delete_all_books(self, client, multiple_books, count_rows):
        # Deleted rows are detached after the commit, so read titles first
        titles = [book.title for book in multiple_books]

        response = client.delete(BOOKS)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "5 books deleted."
        assert body["data"]["deletedCount"] == 5
        assert [b["title"] for b in body["data"]["deletedBooks"]] == titles
        assert count_rows(Book) == 0
        assert count_rows(Author) == 4

    def test_delete_all_books_empty(self, client):
        """Nothing to delete is answered 204 with no body."""
        response = client.delete(BOOKS)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""

    def test_delete_all_then_list(self, client, sample_book):
        client.delete(BOOKS)

        response = client.get(BOOKS)
        assert response.status_code == status.HTTP_404_NOT_FOUND
