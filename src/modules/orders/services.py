"""Order service layer (Use Cases).

Orchestrates the order workflows across the Book, Customer and Order
aggregates through the injected ``IUnitOfWork``.

Business rules enforced here:
- An order references an existing customer.
- Every line needs enough book stock; the stock is reserved as the
  line is added.
- Only Pending orders accept new items or detail changes.
- Cancelling a Pending or Confirmed order, or deleting a Pending one,
  gives the reserved stock back to the catalog.  Shipped copies have
  left the warehouse and are not restocked.
- Only Pending or Cancelled orders can be deleted.

Multi-aggregate workflows run inside a transaction and roll back on
any error before re-raising it unchanged.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog

from modules.books.exceptions import BookNotFound
from modules.customers.exceptions import CustomerNotFound
from modules.orders.constants import (
    DELETABLE_STATES,
    RESTOCK_ON_CANCEL_STATES,
    OrderStatus,
)
from modules.orders.domain import Order
from modules.orders.dtos import OrderOutputDTO
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidStatusTransition,
    OrderNotFound,
    OrderNotModifiable,
)

if TYPE_CHECKING:
    from modules.core.unit_of_work.interfaces import IUnitOfWork
    from modules.orders.dtos import (
        AddOrderItemDTO,
        CreateOrderDTO,
        CreateOrderItemDTO,
        UpdateOrderDTO,
    )

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives an ``IUnitOfWork`` via constructor injection (DIP).
    """

    def __init__(self, unit_of_work: IUnitOfWork) -> None:
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> OrderOutputDTO:
        """Place a new Pending order and reserve stock for every line.

        Raises:
            CustomerNotFound: the customer does not exist.
            BookNotFound: a line references an unknown book.
            InsufficientStock: a book cannot cover the requested quantity.
        """
        uow = self._uow
        log = logger.bind(customer_id=str(dto.customer_id))

        uow.begin_transaction()
        try:
            customer = uow.customers.get_by_id(dto.customer_id)
            if customer is None:
                raise CustomerNotFound(f"Customer with ID {dto.customer_id} not found")

            order = Order(
                customer_id=customer.id,
                shipping_address=dto.shipping_address.to_value_object(),
                payment_method=dto.payment_method,
                notes=dto.notes,
            )
            for line in dto.items:
                self._reserve_line(order, line)

            uow.orders.add(order)
            uow.save_changes()
            uow.commit_transaction()
        except Exception:
            log.warning("order.create_failed")
            uow.rollback_transaction()
            raise

        log.info(
            "order.created",
            order_id=str(order.id),
            items=len(order.items),
            total=str(order.total),
        )
        return OrderOutputDTO.from_entity(order)

    def add_order_item(self, order_id: UUID | str, dto: AddOrderItemDTO) -> OrderOutputDTO:
        """Add a line to a Pending order, reserving its stock.

        Raises:
            OrderNotFound: the order does not exist.
            OrderNotModifiable: the order is not Pending.
            BookNotFound: the book does not exist.
            InsufficientStock: the book cannot cover the requested quantity.
        """
        uow = self._uow
        uow.begin_transaction()
        try:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFound(f"Order with ID {order_id} not found")
            if order.status != OrderStatus.PENDING:
                raise OrderNotModifiable(
                    f"Cannot add items to order with status {order.status}. "
                    "Only pending orders can be modified."
                )

            self._reserve_line(order, dto)

            uow.orders.update(order)
            uow.save_changes()
            uow.commit_transaction()
        except Exception:
            uow.rollback_transaction()
            raise

        logger.info(
            "order.item_added",
            order_id=str(order.id),
            book_id=str(dto.book_id),
            quantity=dto.quantity,
        )
        return OrderOutputDTO.from_entity(order)

    def update_order_status(self, order_id: UUID | str, new_status: str) -> OrderOutputDTO:
        """Move an order through its state machine.

        Raises:
            OrderNotFound: the order does not exist.
            InvalidStatusTransition: the target is unknown, Pending, or not
                reachable from the current status.
        """
        order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order with ID {order_id} not found")

        previous = order.status
        if new_status == OrderStatus.CANCELLED:
            self._cancel(order)
        else:
            transitions = {
                OrderStatus.CONFIRMED: order.confirm_order,
                OrderStatus.SHIPPED: order.ship_order,
                OrderStatus.DELIVERED: order.deliver_order,
            }
            transition = transitions.get(new_status)
            if transition is None:
                raise InvalidStatusTransition(f"Invalid status transition to {new_status}")
            transition()
            self._uow.orders.update(order)
            self._uow.save_changes()

        logger.info(
            "order.status_updated",
            order_id=str(order.id),
            from_status=previous,
            to_status=order.status,
        )
        return OrderOutputDTO.from_entity(order)

    def update_order(self, order_id: UUID | str, dto: UpdateOrderDTO) -> OrderOutputDTO:
        """Change the shipping address and notes of a Pending order.

        Raises:
            OrderNotFound: the order does not exist.
            OrderNotModifiable: the order is not Pending.
        """
        order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order with ID {order_id} not found")
        if order.status != OrderStatus.PENDING:
            raise OrderNotModifiable(
                f"Cannot update order with status {order.status}. "
                "Only pending orders can be updated."
            )

        order.update_shipping_address(dto.shipping_address.to_value_object())
        if dto.notes:
            order.update_notes(dto.notes)

        self._uow.orders.update(order)
        self._uow.save_changes()
        logger.info("order.updated", order_id=str(order.id))
        return OrderOutputDTO.from_entity(order)

    def delete_order(self, order_id: UUID | str) -> bool:
        """Delete a Pending or Cancelled order; returns ``False`` if missing.

        Stock reserved by a Pending order goes back to the catalog.

        Raises:
            OrderNotModifiable: the order is Confirmed, Shipped or Delivered.
        """
        uow = self._uow
        uow.begin_transaction()
        try:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                uow.rollback_transaction()
                return False
            if order.status not in DELETABLE_STATES:
                raise OrderNotModifiable(
                    f"Cannot delete order with status {order.status}. "
                    "Only pending or cancelled orders can be deleted."
                )

            if order.status == OrderStatus.PENDING:
                self._release_stock(order)

            uow.orders.delete(order.id)
            uow.save_changes()
            uow.commit_transaction()
        except Exception:
            uow.rollback_transaction()
            raise

        logger.info("order.deleted", order_id=str(order_id))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: UUID | str) -> Optional[OrderOutputDTO]:
        order = self._uow.orders.get_by_id(order_id)
        return OrderOutputDTO.from_entity(order) if order is not None else None

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[OrderOutputDTO]:
        """Return orders, optionally filtered (see ``OrderFilter``)."""
        return [OrderOutputDTO.from_entity(o) for o in self._uow.orders.list(filters)]

    def list_orders_by_customer(self, customer_id: UUID | str) -> List[OrderOutputDTO]:
        return [
            OrderOutputDTO.from_entity(o)
            for o in self._uow.orders.get_by_customer_id(customer_id)
        ]

    def list_orders_by_status(self, status: str) -> List[OrderOutputDTO]:
        return [OrderOutputDTO.from_entity(o) for o in self._uow.orders.get_by_status(status)]

    def list_orders_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[OrderOutputDTO]:
        return [
            OrderOutputDTO.from_entity(o)
            for o in self._uow.orders.get_by_date_range(start, end)
        ]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reserve_line(self, order: Order, line: CreateOrderItemDTO) -> None:
        book = self._uow.books.get_by_id(line.book_id)
        if book is None:
            raise BookNotFound(f"Book with ID {line.book_id} not found")
        if book.stock_quantity < line.quantity:
            raise InsufficientStock(
                f"Insufficient stock for book '{book.title}'. "
                f"Available: {book.stock_quantity}, Requested: {line.quantity}"
            )

        order.add_order_item(book, line.quantity)
        book.reserve_stock(line.quantity)
        self._uow.books.update(book)

    def _release_stock(self, order: Order) -> None:
        for item in order.items:
            book = self._uow.books.get_by_id(item.book_id)
            if book is None:
                continue
            book.update_stock(book.stock_quantity + item.quantity)
            self._uow.books.update(book)

    def _cancel(self, order: Order) -> None:
        restock = order.status in RESTOCK_ON_CANCEL_STATES
        uow = self._uow
        uow.begin_transaction()
        try:
            order.cancel_order()
            if restock:
                self._release_stock(order)
            uow.orders.update(order)
            uow.save_changes()
            uow.commit_transaction()
        except Exception:
            uow.rollback_transaction()
            raise
