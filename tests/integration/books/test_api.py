"""Integration tests for the book catalog API."""

from __future__ import annotations

import pytest

from modules.books.models import BookModel

pytestmark = pytest.mark.integration

URL = "/api/v1/books/"


@pytest.fixture()
def book_payload():
    return {
        "title": "The Pragmatic Programmer",
        "author": "Andrew Hunt",
        "isbn": "9780201616224",
        "description": "From journeyman to master.",
        "price": "39.95",
        "stock_quantity": 5,
        "category": "Technology",
        "published_date": "1999-10-20",
        "publisher": "Addison-Wesley",
        "pages": 352,
    }


class TestBookCreate:
    def test_staff_can_create(self, staff_client, book_payload):
        response = staff_client.post(URL, book_payload, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["isbn"] == "9780201616224"
        assert data["status"] == "Available"
        assert data["price"] == "39.95"
        assert BookModel.objects.filter(id=data["id"]).exists()

    def test_regular_user_forbidden(self, user_client, book_payload):
        response = user_client.post(URL, book_payload, format="json")

        assert response.status_code == 403
        assert response.json()["type"] == "client_error"

    def test_duplicate_isbn_conflict(self, staff_client, book_payload):
        staff_client.post(URL, book_payload, format="json")
        response = staff_client.post(URL, book_payload, format="json")

        assert response.status_code == 409
        error = response.json()["errors"][0]
        assert error["code"] == "book_already_exists"
        assert error["detail"] == "Book with ISBN 9780201616224 already exists"

    def test_invalid_payload(self, staff_client, book_payload):
        book_payload.update(pages=0, category="Cookbooks")
        response = staff_client.post(URL, book_payload, format="json")

        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "validation_error"
        assert {e["attr"] for e in data["errors"]} == {"pages", "category"}


class TestBookRead:
    def test_list_paginated(self, user_client, book):
        response = user_client.get(URL)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["id"] == str(book.id)

    def test_list_search(self, user_client, book):
        assert user_client.get(URL, {"search": "herbert"}).json()["count"] == 1
        assert user_client.get(URL, {"search": "tolkien"}).json()["count"] == 0

    def test_list_invalid_filter(self, user_client, book):
        response = user_client.get(URL, {"status": "Lost"})

        assert response.status_code == 400

    def test_retrieve(self, user_client, book):
        response = user_client.get(f"{URL}{book.id}/")

        assert response.status_code == 200
        assert response.json()["title"] == "Dune"

    def test_retrieve_unknown(self, user_client):
        response = user_client.get(f"{URL}0192f0c1-0000-7000-8000-000000000000/")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "not_found"

    def test_anonymous_rejected(self, api_client):
        assert api_client.get(URL).status_code == 401


class TestBookUpdateDelete:
    def test_update(self, staff_client, book, book_payload):
        book_payload.update(price="10.00", stock_quantity=0)
        response = staff_client.put(f"{URL}{book.id}/", book_payload, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["price"] == "10.00"
        assert data["status"] == "OutOfStock"
        assert data["isbn"] == book.isbn

    def test_update_unknown(self, staff_client, book_payload):
        response = staff_client.put(
            f"{URL}0192f0c1-0000-7000-8000-000000000000/", book_payload, format="json"
        )
        assert response.status_code == 404

    def test_delete(self, staff_client, book):
        response = staff_client.delete(f"{URL}{book.id}/")

        assert response.status_code == 204
        assert not BookModel.objects.filter(id=book.id).exists()

    def test_delete_unknown(self, staff_client):
        response = staff_client.delete(f"{URL}0192f0c1-0000-7000-8000-000000000000/")
        assert response.status_code == 404
