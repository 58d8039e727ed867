"""Book DRF serializers for API input.

The serializer operates at the Interface layer (API Views).
It handles HTTP-level concerns: request parsing and field-level
validation.  Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``; responses are rendered from the output
DTOs.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.books.constants import (
    AUTHOR_MAX_LENGTH,
    ISBN_MAX_LENGTH,
    PUBLISHER_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    BookCategory,
)


class UpdateBookSerializer(serializers.Serializer):
    """Validates a full book update payload."""

    title = serializers.CharField(max_length=TITLE_MAX_LENGTH)
    author = serializers.CharField(max_length=AUTHOR_MAX_LENGTH)
    description = serializers.CharField(required=False, default="", allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    stock_quantity = serializers.IntegerField(min_value=0)
    category = serializers.ChoiceField(choices=BookCategory.choices)
    publisher = serializers.CharField(
        max_length=PUBLISHER_MAX_LENGTH, required=False, default="", allow_blank=True
    )
    pages = serializers.IntegerField(min_value=1)


class CreateBookSerializer(UpdateBookSerializer):
    """Validates the book creation payload."""

    isbn = serializers.CharField(max_length=ISBN_MAX_LENGTH)
    stock_quantity = serializers.IntegerField(min_value=0, required=False, default=0)
    published_date = serializers.DateField()
