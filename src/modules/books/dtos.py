"""Book DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateBookDTO``: input for book creation.
- ``UpdateBookDTO``: input for a full book update.
- ``BookOutputDTO``: output with all book fields.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.books.constants import BookCategory, BookStatus

if TYPE_CHECKING:
    from modules.books.domain import Book


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateBookDTO(BaseModel):
    """Immutable DTO for book creation requests.

    Validates:
    - ``isbn`` is stripped of surrounding whitespace.
    - ``price`` and ``stock_quantity`` are non-negative.
    - ``pages`` is positive.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    isbn: str
    description: str = ""
    price: Decimal
    stock_quantity: int = 0
    category: BookCategory
    published_date: date
    publisher: str = ""
    pages: int

    @field_validator("isbn")
    @classmethod
    def isbn_strip(cls, v: str) -> str:
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price must be non-negative.")
        return v

    @field_validator("stock_quantity")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock quantity must be non-negative.")
        return v

    @field_validator("pages")
    @classmethod
    def pages_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Pages must be positive.")
        return v


class UpdateBookDTO(BaseModel):
    """Immutable DTO for book update requests.

    Details, price and stock are replaced as a whole; the ISBN and
    publication date are fixed at creation.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    description: str = ""
    price: Decimal
    stock_quantity: int
    category: BookCategory
    publisher: str = ""
    pages: int


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class BookOutputDTO(BaseModel):
    """Immutable DTO for book API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    title: str
    author: str
    isbn: str
    description: str
    price: Decimal
    stock_quantity: int
    category: BookCategory
    published_date: date
    publisher: str
    pages: int
    status: BookStatus
    created_at: datetime
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, book: Book) -> BookOutputDTO:
        """Build an output DTO from a ``Book`` entity."""
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            description=book.description,
            price=book.price,
            stock_quantity=book.stock_quantity,
            category=book.category,
            published_date=book.published_date,
            publisher=book.publisher,
            pages=book.pages,
            status=book.status,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
