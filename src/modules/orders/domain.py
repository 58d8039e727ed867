"""Order aggregate: ``Order`` root and its owned ``OrderItem`` lines.

State machine: Pending -> Confirmed -> Shipped -> Delivered.

Cancelled is reachable from every state except Delivered.  Items can
only change while the order is Pending, and every item mutation
recomputes subtotal, tax, shipping cost and total.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional
from uuid import UUID

from modules.orders.constants import (
    FREE_SHIPPING_THRESHOLD,
    SHIPPING_COST,
    TAX_RATE,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
)
from modules.orders.exceptions import InvalidStatusTransition, OrderNotModifiable
from shared.domain.entity import BaseEntity, utcnow
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import Address

if TYPE_CHECKING:
    from modules.books.domain import Book

ZERO = Decimal("0")


class OrderItem(BaseEntity):
    """A single order line; ``unit_price`` is a snapshot of the book price."""

    def __init__(
        self,
        order_id: UUID,
        book_id: UUID,
        unit_price: Decimal,
        quantity: int,
        id: Optional[UUID] = None,
    ) -> None:
        if not order_id:
            raise ValidationError("Order ID cannot be empty.")
        if not book_id:
            raise ValidationError("Book ID cannot be empty.")
        if unit_price < 0:
            raise ValidationError("Unit price cannot be negative.")
        if quantity <= 0:
            raise ValidationError("Quantity must be positive.")

        super().__init__(id)
        self._order_id = order_id
        self._book_id = book_id
        self._unit_price = Decimal(str(unit_price))
        self._quantity = quantity
        self._total_price = self._unit_price * quantity

    @classmethod
    def restore(
        cls,
        *,
        id: UUID,
        order_id: UUID,
        book_id: UUID,
        unit_price: Decimal,
        quantity: int,
        created_at: datetime,
        updated_at: Optional[datetime],
    ) -> OrderItem:
        item = cls._blank(id, created_at, updated_at)
        item._order_id = order_id
        item._book_id = book_id
        item._unit_price = unit_price
        item._quantity = quantity
        item._total_price = unit_price * quantity
        return item

    @property
    def order_id(self) -> UUID:
        return self._order_id

    @property
    def book_id(self) -> UUID:
        return self._book_id

    @property
    def unit_price(self) -> Decimal:
        return self._unit_price

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def total_price(self) -> Decimal:
        return self._total_price

    def update_quantity(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Quantity must be positive.")
        self._quantity = quantity
        self._total_price = self._unit_price * quantity
        self._touch()

    def update_unit_price(self, unit_price: Decimal) -> None:
        if unit_price < 0:
            raise ValidationError("Unit price cannot be negative.")
        self._unit_price = Decimal(str(unit_price))
        self._total_price = self._unit_price * self._quantity
        self._touch()

    def __repr__(self) -> str:
        return f"<OrderItem book={self._book_id} qty={self._quantity} @ {self._unit_price}>"


class Order(BaseEntity):
    """Order aggregate root.

    ``customer_id`` is a reference only; the order exclusively owns its
    items.  Totals are derived and never set directly.
    """

    def __init__(
        self,
        customer_id: UUID,
        shipping_address: Address,
        payment_method: PaymentMethod,
        notes: Optional[str] = None,
        id: Optional[UUID] = None,
    ) -> None:
        if not customer_id:
            raise ValidationError("Customer ID cannot be empty.")
        if shipping_address is None:
            raise ValidationError("Shipping address cannot be null.")

        super().__init__(id)
        self._customer_id = customer_id
        self._shipping_address = shipping_address
        self._payment_method = PaymentMethod(payment_method)
        self._status = OrderStatus.PENDING
        self._order_date = self._created_at
        self._shipped_date: Optional[datetime] = None
        self._delivered_date: Optional[datetime] = None
        self._notes = notes
        self._items: List[OrderItem] = []
        self._calculate_totals()

    @classmethod
    def restore(
        cls,
        *,
        id: UUID,
        customer_id: UUID,
        status: str,
        order_date: datetime,
        shipped_date: Optional[datetime],
        delivered_date: Optional[datetime],
        shipping_address: Address,
        payment_method: str,
        notes: Optional[str],
        items: Iterable[OrderItem],
        created_at: datetime,
        updated_at: Optional[datetime],
    ) -> Order:
        """Rebuild a persisted order; totals are recomputed from its items."""
        order = cls._blank(id, created_at, updated_at)
        order._customer_id = customer_id
        order._status = OrderStatus(status)
        order._order_date = order_date
        order._shipped_date = shipped_date
        order._delivered_date = delivered_date
        order._shipping_address = shipping_address
        order._payment_method = PaymentMethod(payment_method)
        order._notes = notes
        order._items = list(items)
        order._calculate_totals()
        return order

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def customer_id(self) -> UUID:
        return self._customer_id

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def order_date(self) -> datetime:
        return self._order_date

    @property
    def shipped_date(self) -> Optional[datetime]:
        return self._shipped_date

    @property
    def delivered_date(self) -> Optional[datetime]:
        return self._delivered_date

    @property
    def shipping_address(self) -> Address:
        return self._shipping_address

    @property
    def payment_method(self) -> PaymentMethod:
        return self._payment_method

    @property
    def notes(self) -> Optional[str]:
        return self._notes

    @property
    def items(self) -> List[OrderItem]:
        return list(self._items)

    @property
    def subtotal(self) -> Decimal:
        return self._subtotal

    @property
    def tax(self) -> Decimal:
        return self._tax

    @property
    def shipping_cost(self) -> Decimal:
        return self._shipping_cost

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def is_terminal(self) -> bool:
        return self._status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        if new_status == OrderStatus.CONFIRMED and not self._items:
            return False
        return new_status in VALID_TRANSITIONS.get(self._status, set())

    def find_item(self, book_id: UUID) -> Optional[OrderItem]:
        return next((item for item in self._items if item.book_id == book_id), None)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_order_item(self, book: Book, quantity: int) -> None:
        """Add *quantity* of *book*, merging into an existing line if present.

        Does not touch the book's stock; reservation is the caller's job.
        """
        if book is None:
            raise ValidationError("Book cannot be null.")
        if quantity <= 0:
            raise ValidationError("Quantity must be positive.")
        if self._status != OrderStatus.PENDING:
            raise OrderNotModifiable("Cannot add items to an order that is not pending.")

        existing = self.find_item(book.id)
        if existing is not None:
            existing.update_quantity(existing.quantity + quantity)
        else:
            self._items.append(OrderItem(self._id, book.id, book.price, quantity))
        self._calculate_totals()

    def remove_order_item(self, book_id: UUID) -> None:
        if self._status != OrderStatus.PENDING:
            raise OrderNotModifiable("Cannot remove items from an order that is not pending.")
        item = self.find_item(book_id)
        if item is not None:
            self._items.remove(item)
            self._calculate_totals()

    def update_order_item_quantity(self, book_id: UUID, quantity: int) -> None:
        if self._status != OrderStatus.PENDING:
            raise OrderNotModifiable("Cannot update items in an order that is not pending.")
        item = self.find_item(book_id)
        if item is not None:
            item.update_quantity(quantity)
            self._calculate_totals()

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def confirm_order(self) -> None:
        if self._status != OrderStatus.PENDING:
            raise InvalidStatusTransition("Only pending orders can be confirmed.")
        if not self._items:
            raise InvalidStatusTransition("Cannot confirm an order without items.")
        self._status = OrderStatus.CONFIRMED
        self._touch()

    def ship_order(self) -> None:
        if self._status != OrderStatus.CONFIRMED:
            raise InvalidStatusTransition("Only confirmed orders can be shipped.")
        self._status = OrderStatus.SHIPPED
        self._shipped_date = utcnow()
        self._touch()

    def deliver_order(self) -> None:
        if self._status != OrderStatus.SHIPPED:
            raise InvalidStatusTransition("Only shipped orders can be delivered.")
        self._status = OrderStatus.DELIVERED
        self._delivered_date = utcnow()
        self._touch()

    def cancel_order(self) -> None:
        if self._status == OrderStatus.DELIVERED:
            raise InvalidStatusTransition("Cannot cancel a delivered order.")
        self._status = OrderStatus.CANCELLED
        self._touch()

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------

    def update_shipping_address(self, address: Address) -> None:
        if self._status != OrderStatus.PENDING:
            raise OrderNotModifiable("Cannot update shipping address for non-pending orders.")
        if address is None:
            raise ValidationError("Shipping address cannot be null.")
        self._shipping_address = address
        self._touch()

    def update_notes(self, notes: Optional[str]) -> None:
        self._notes = notes
        self._touch()

    def _calculate_totals(self) -> None:
        self._subtotal = sum((item.total_price for item in self._items), ZERO)
        self._tax = self._subtotal * TAX_RATE
        self._shipping_cost = ZERO if self._subtotal > FREE_SHIPPING_THRESHOLD else SHIPPING_COST
        self._total = self._subtotal + self._tax + self._shipping_cost

    def __repr__(self) -> str:
        return f"<Order {self._id} {self._status} items={len(self._items)} total={self._total}>"
