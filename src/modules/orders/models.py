"""Order and OrderItem persistence models.

- The shipping ``Address`` is stored as embedded ``shipping_*`` columns.
- Money columns keep 4 decimal places so derived totals (8% tax) are
  stored without rounding.
- Deleting a customer cascades to its orders; a book referenced by an
  order item cannot be deleted (``PROTECT``).
- Deleting an order cascades to its items.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import NOTES_MAX_LENGTH, OrderStatus, PaymentMethod
from shared.domain.value_objects import Address

MONEY = {"max_digits": 14, "decimal_places": 4}


class OrderModel(BaseModel):
    """Row for the ``Order`` aggregate root (see ``modules.orders.domain``)."""

    customer = models.ForeignKey(
        "customers.CustomerModel",
        on_delete=models.CASCADE,
        related_name="orders",
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    order_date = models.DateTimeField()
    shipped_date = models.DateTimeField(null=True, blank=True, default=None)
    delivered_date = models.DateTimeField(null=True, blank=True, default=None)
    shipping_street = models.CharField(max_length=200)
    shipping_city = models.CharField(max_length=100)
    shipping_state = models.CharField(max_length=50)
    shipping_zip_code = models.CharField(max_length=20)
    shipping_country = models.CharField(max_length=100)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)
    subtotal = models.DecimalField(**MONEY, default=Decimal("0"))
    tax = models.DecimalField(**MONEY, default=Decimal("0"))
    shipping_cost = models.DecimalField(**MONEY, default=Decimal("0"))
    total = models.DecimalField(**MONEY, default=Decimal("0"))
    notes = models.CharField(  # noqa: DJ01
        max_length=NOTES_MAX_LENGTH, null=True, blank=True, default=None
    )

    class Meta:
        db_table = "orders"
        ordering = ["-order_date"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-order_date"], name="orders_order_date_idx"),
        ]

    @property
    def shipping_address(self) -> Address:
        return Address(
            street=self.shipping_street,
            city=self.shipping_city,
            state=self.shipping_state,
            zip_code=self.shipping_zip_code,
            country=self.shipping_country,
        )

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItemModel(BaseModel):
    """Row for an ``OrderItem``; ``unit_price`` is the price snapshot."""

    order = models.ForeignKey(
        "orders.OrderModel",
        on_delete=models.CASCADE,
        related_name="items",
    )
    book = models.ForeignKey(
        "books.BookModel",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    total_price = models.DecimalField(**MONEY)

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
            models.UniqueConstraint(
                fields=["order", "book"],
                name="order_items_unique_book_per_order",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.book_id} x{self.quantity} (${self.total_price})"
