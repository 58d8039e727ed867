from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.books.constants import BookCategory
from modules.books.domain import Book
from modules.core.unit_of_work.django_unit_of_work import DjangoUnitOfWork
from modules.customers.domain import Customer
from shared.domain.value_objects import Address

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def staff_client():
    """APIClient force-authenticated as a staff user."""
    client = APIClient()
    user = User.objects.create_user(
        username="staff", password="testpass123", is_staff=True
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def user_client():
    """APIClient force-authenticated as a regular (non-staff) user."""
    client = APIClient()
    user = User.objects.create_user(username="reader", password="testpass123")
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def address():
    return Address(
        street="221B Baker Street",
        city="London",
        state="Greater London",
        zip_code="NW1 6XE",
        country="UK",
    )


@pytest.fixture()
def address_payload():
    return {
        "street": "221B Baker Street",
        "city": "London",
        "state": "Greater London",
        "zip_code": "NW1 6XE",
        "country": "UK",
    }


@pytest.fixture()
def new_book():
    """Factory for unsaved ``Book`` entities."""

    def _make(**overrides) -> Book:
        fields = {
            "title": "Dune",
            "author": "Frank Herbert",
            "isbn": "9780441013593",
            "description": "Desert planet.",
            "price": Decimal("45.99"),
            "stock_quantity": 10,
            "category": BookCategory.SCIENCE_FICTION,
            "published_date": date(1965, 8, 1),
            "publisher": "Chilton",
            "pages": 412,
        }
        fields.update(overrides)
        return Book(**fields)

    return _make


@pytest.fixture()
def new_customer(address):
    """Factory for unsaved ``Customer`` entities."""

    def _make(**overrides) -> Customer:
        fields = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "phone_number": "+44 20 7946 0000",
            "address": address,
        }
        fields.update(overrides)
        return Customer(**fields)

    return _make


@pytest.fixture()
def persist():
    """Save entities through a throwaway unit of work and return them."""

    def _persist(*entities):
        with DjangoUnitOfWork() as uow:
            for entity in entities:
                repository = {
                    "Book": uow.books,
                    "Customer": uow.customers,
                    "Order": uow.orders,
                }[type(entity).__name__]
                repository.add(entity)
            uow.save_changes()
        return entities[0] if len(entities) == 1 else entities

    return _persist


@pytest.fixture()
def book(new_book, persist):
    return persist(new_book())


@pytest.fixture()
def customer(new_customer, persist):
    return persist(new_customer())
