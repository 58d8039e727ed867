"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``AddOrderItemDTO``: input for adding a line to a pending order.
- ``UpdateOrderDTO``: input for shipping address / notes changes.
- ``OrderItemOutputDTO``: output for a single line item.
- ``OrderOutputDTO``: output with items and derived totals.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.core.dtos import AddressDTO
from modules.orders.constants import OrderStatus, PaymentMethod

if TYPE_CHECKING:
    from modules.orders.domain import Order, OrderItem


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order line in a creation request.

    ``unit_price`` is resolved by the Service Layer from the catalog.
    """

    model_config = ConfigDict(frozen=True)

    book_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be greater than 0.")
        return v


class AddOrderItemDTO(CreateOrderItemDTO):
    """Immutable DTO for adding a line to an existing order."""


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    The same book may appear more than once; the order merges the lines.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    shipping_address: AddressDTO
    payment_method: PaymentMethod
    notes: Optional[str] = None
    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must contain at least one item.")
        return v


class UpdateOrderDTO(BaseModel):
    """Immutable DTO for order update requests."""

    model_config = ConfigDict(frozen=True)

    shipping_address: AddressDTO
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderItemOutputDTO(BaseModel):
    """Immutable DTO for order item API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    book_id: UUID
    unit_price: Decimal
    quantity: int
    total_price: Decimal

    @classmethod
    def from_entity(cls, item: OrderItem) -> OrderItemOutputDTO:
        return cls(
            id=item.id,
            book_id=item.book_id,
            unit_price=item.unit_price,
            quantity=item.quantity,
            total_price=item.total_price,
        )


class OrderOutputDTO(BaseModel):
    """Immutable DTO for order API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    customer_id: UUID
    status: OrderStatus
    order_date: datetime
    shipped_date: Optional[datetime]
    delivered_date: Optional[datetime]
    shipping_address: AddressDTO
    payment_method: PaymentMethod
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal
    notes: Optional[str]
    items: List[OrderItemOutputDTO]
    created_at: datetime
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        """Build an output DTO from an ``Order`` aggregate."""
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            status=order.status,
            order_date=order.order_date,
            shipped_date=order.shipped_date,
            delivered_date=order.delivered_date,
            shipping_address=AddressDTO.from_value_object(order.shipping_address),
            payment_method=order.payment_method,
            subtotal=order.subtotal,
            tax=order.tax,
            shipping_cost=order.shipping_cost,
            total=order.total,
            notes=order.notes,
            items=[OrderItemOutputDTO.from_entity(item) for item in order.items],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
