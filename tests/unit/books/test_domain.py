"""Unit tests for the ``Book`` entity."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.books.constants import BookCategory, BookStatus
from shared.domain.exceptions import ValidationError

pytestmark = pytest.mark.unit


class TestBookCreation:
    def test_valid_book(self, new_book):
        book = new_book()
        assert book.title == "Dune"
        assert book.price == Decimal("45.99")
        assert book.status == BookStatus.AVAILABLE
        assert book.updated_at is None

    def test_zero_stock_is_out_of_stock(self, new_book):
        assert new_book(stock_quantity=0).status == BookStatus.OUT_OF_STOCK

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"title": ""}, "Title cannot be empty."),
            ({"author": "  "}, "Author cannot be empty."),
            ({"isbn": ""}, "ISBN cannot be empty."),
            ({"price": Decimal("-0.01")}, "Price cannot be negative."),
            ({"stock_quantity": -1}, "Stock quantity cannot be negative."),
            ({"pages": 0}, "Pages must be positive."),
        ],
    )
    def test_invalid_fields_rejected(self, new_book, overrides, message):
        with pytest.raises(ValidationError, match=message):
            new_book(**overrides)

    def test_float_price_kept_as_written(self, new_book):
        book = new_book(price=45.99)
        assert book.price == Decimal("45.99")
        book.update_price(19.99)
        assert book.price == Decimal("19.99")

    def test_free_book_allowed(self, new_book):
        assert new_book(price=Decimal("0")).price == Decimal("0")


class TestBookStock:
    def test_update_stock_to_zero_marks_out_of_stock(self, new_book):
        book = new_book()
        book.update_stock(0)
        assert book.stock_quantity == 0
        assert book.status == BookStatus.OUT_OF_STOCK
        assert book.updated_at is not None

    def test_update_stock_restores_available(self, new_book):
        book = new_book(stock_quantity=0)
        book.update_stock(4)
        assert book.status == BookStatus.AVAILABLE

    def test_update_stock_negative_rejected(self, new_book):
        book = new_book()
        with pytest.raises(ValidationError, match="Stock quantity cannot be negative."):
            book.update_stock(-1)
        assert book.stock_quantity == 10

    def test_reserve_stock_decrements(self, new_book):
        book = new_book(stock_quantity=5)
        book.reserve_stock(3)
        assert book.stock_quantity == 2
        assert book.status == BookStatus.AVAILABLE

    def test_reserve_all_stock_marks_out_of_stock(self, new_book):
        book = new_book(stock_quantity=3)
        book.reserve_stock(3)
        assert book.stock_quantity == 0
        assert book.status == BookStatus.OUT_OF_STOCK

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_reserve_non_positive_rejected(self, new_book, quantity):
        book = new_book()
        with pytest.raises(ValidationError, match="Reservation quantity must be positive."):
            book.reserve_stock(quantity)

    def test_reserve_more_than_stock_leaves_stock_unchanged(self, new_book):
        book = new_book(stock_quantity=2)
        with pytest.raises(ValidationError, match="Insufficient stock for reservation."):
            book.reserve_stock(5)
        assert book.stock_quantity == 2
        assert book.updated_at is None


class TestBookDetails:
    def test_update_price(self, new_book):
        book = new_book()
        book.update_price(Decimal("12.50"))
        assert book.price == Decimal("12.50")

    def test_update_price_negative_rejected(self, new_book):
        with pytest.raises(ValidationError, match="Price cannot be negative."):
            new_book().update_price(Decimal("-1"))

    def test_update_details_keeps_price_and_stock(self, new_book):
        book = new_book()
        book.update_details(
            title="Dune Messiah",
            author="Frank Herbert",
            description="",
            category=BookCategory.FICTION,
            publisher="Putnam",
            pages=256,
        )
        assert book.title == "Dune Messiah"
        assert book.category == BookCategory.FICTION
        assert book.price == Decimal("45.99")
        assert book.stock_quantity == 10

    def test_update_details_blank_title_rejected(self, new_book):
        book = new_book()
        with pytest.raises(ValidationError, match="Title cannot be empty."):
            book.update_details("", "A", "", BookCategory.OTHER, "", 10)
        assert book.title == "Dune"
