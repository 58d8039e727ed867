"""Book entity.

Invariants:
- title, author and isbn are never blank.
- price >= 0, stock_quantity >= 0, pages > 0.
- status is ``OutOfStock`` exactly when stock_quantity is 0; it is
  recomputed on every stock mutation.
- Stock changes only through ``update_stock`` (absolute) or
  ``reserve_stock`` (relative decrement).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from modules.books.constants import BookCategory, BookStatus
from shared.domain.entity import BaseEntity, require_text
from shared.domain.exceptions import ValidationError


class Book(BaseEntity):
    def __init__(
        self,
        title: str,
        author: str,
        isbn: str,
        description: str,
        price: Decimal,
        stock_quantity: int,
        category: BookCategory,
        published_date: date,
        publisher: str,
        pages: int,
        id: Optional[UUID] = None,
    ) -> None:
        require_text(title, "Title cannot be empty.")
        require_text(author, "Author cannot be empty.")
        require_text(isbn, "ISBN cannot be empty.")
        if price < 0:
            raise ValidationError("Price cannot be negative.")
        if stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative.")
        if pages <= 0:
            raise ValidationError("Pages must be positive.")

        super().__init__(id)
        self._title = title
        self._author = author
        self._isbn = isbn
        self._description = description or ""
        self._price = Decimal(str(price))
        self._stock_quantity = stock_quantity
        self._category = BookCategory(category)
        self._published_date = published_date
        self._publisher = publisher or ""
        self._pages = pages
        self._status = self._derive_status()

    @classmethod
    def restore(
        cls,
        *,
        id: UUID,
        title: str,
        author: str,
        isbn: str,
        description: str,
        price: Decimal,
        stock_quantity: int,
        category: str,
        published_date: date,
        publisher: str,
        pages: int,
        status: str,
        created_at: datetime,
        updated_at: Optional[datetime],
    ) -> Book:
        """Rebuild a persisted book, keeping its stored status as-is."""
        book = cls._blank(id, created_at, updated_at)
        book._title = title
        book._author = author
        book._isbn = isbn
        book._description = description
        book._price = price
        book._stock_quantity = stock_quantity
        book._category = BookCategory(category)
        book._published_date = published_date
        book._publisher = publisher
        book._pages = pages
        book._status = BookStatus(status)
        return book

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self._title

    @property
    def author(self) -> str:
        return self._author

    @property
    def isbn(self) -> str:
        return self._isbn

    @property
    def description(self) -> str:
        return self._description

    @property
    def price(self) -> Decimal:
        return self._price

    @property
    def stock_quantity(self) -> int:
        return self._stock_quantity

    @property
    def category(self) -> BookCategory:
        return self._category

    @property
    def published_date(self) -> date:
        return self._published_date

    @property
    def publisher(self) -> str:
        return self._publisher

    @property
    def pages(self) -> int:
        return self._pages

    @property
    def status(self) -> BookStatus:
        return self._status

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_stock(self, quantity: int) -> None:
        """Set the stock to an absolute value."""
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative.")
        self._stock_quantity = quantity
        self._status = self._derive_status()
        self._touch()

    def reserve_stock(self, quantity: int) -> None:
        """Decrement stock by *quantity*; stock is untouched on failure."""
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive.")
        if quantity > self._stock_quantity:
            raise ValidationError("Insufficient stock for reservation.")
        self._stock_quantity -= quantity
        if self._stock_quantity == 0:
            self._status = BookStatus.OUT_OF_STOCK
        self._touch()

    def update_price(self, price: Decimal) -> None:
        if price < 0:
            raise ValidationError("Price cannot be negative.")
        self._price = Decimal(str(price))
        self._touch()

    def update_details(
        self,
        title: str,
        author: str,
        description: str,
        category: BookCategory,
        publisher: str,
        pages: int,
    ) -> None:
        """Replace catalog details. Price and stock are left untouched."""
        require_text(title, "Title cannot be empty.")
        require_text(author, "Author cannot be empty.")
        if pages <= 0:
            raise ValidationError("Pages must be positive.")
        self._title = title
        self._author = author
        self._description = description or ""
        self._category = BookCategory(category)
        self._publisher = publisher or ""
        self._pages = pages
        self._touch()

    def _derive_status(self) -> BookStatus:
        if self._stock_quantity > 0:
            return BookStatus.AVAILABLE
        return BookStatus.OUT_OF_STOCK

    def __repr__(self) -> str:
        return f"<Book {self._isbn} {self._title!r} stock={self._stock_quantity}>"
