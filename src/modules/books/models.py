"""Book persistence model.

Business rules backed by the schema:
- ISBN is unique across the catalog.
- Price and stock quantity cannot be negative; pages must be positive.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.books.constants import (
    AUTHOR_MAX_LENGTH,
    ISBN_MAX_LENGTH,
    PUBLISHER_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    BookCategory,
    BookStatus,
)
from modules.core.models import BaseModel


class BookModel(BaseModel):
    """Row for the ``Book`` entity (see ``modules.books.domain``)."""

    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    author = models.CharField(max_length=AUTHOR_MAX_LENGTH)
    isbn = models.CharField(max_length=ISBN_MAX_LENGTH, unique=True)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    stock_quantity = models.PositiveIntegerField(default=0)
    category = models.CharField(max_length=20, choices=BookCategory.choices)
    published_date = models.DateField()
    publisher = models.CharField(max_length=PUBLISHER_MAX_LENGTH, blank=True, default="")
    pages = models.PositiveIntegerField()
    status = models.CharField(
        max_length=20,
        choices=BookStatus.choices,
        default=BookStatus.AVAILABLE,
    )

    class Meta:
        db_table = "books"
        ordering = ["title"]
        indexes = [
            models.Index(fields=["category"], name="books_category_idx"),
            models.Index(fields=["status"], name="books_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="books_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(pages__gt=0),
                name="books_pages_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.isbn} - {self.title}"
