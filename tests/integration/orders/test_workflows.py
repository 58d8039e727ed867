"""End-to-end order workflows through ``OrderService`` and the database.

Stock is reserved when lines are added and released when a Pending
order is deleted or a Pending or Confirmed order is cancelled.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.books.models import BookModel
from modules.core.dtos import AddressDTO
from modules.core.unit_of_work.django_unit_of_work import DjangoUnitOfWork
from modules.customers.exceptions import CustomerHasActiveOrders
from modules.customers.services import CustomerService
from modules.orders.constants import OrderStatus, PaymentMethod
from modules.orders.dtos import AddOrderItemDTO, CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import InsufficientStock, InvalidStatusTransition
from modules.orders.models import OrderModel
from modules.orders.services import OrderService

pytestmark = pytest.mark.integration


def _service() -> OrderService:
    return OrderService(DjangoUnitOfWork())


def _stock(book) -> int:
    return BookModel.objects.get(id=book.id).stock_quantity


@pytest.fixture()
def place_order(customer, address_payload):
    def _place(*lines):
        return _service().create_order(
            CreateOrderDTO(
                customer_id=customer.id,
                shipping_address=AddressDTO(**address_payload),
                payment_method=PaymentMethod.CREDIT_CARD,
                items=[CreateOrderItemDTO(book_id=b.id, quantity=q) for b, q in lines],
            )
        )

    return _place


class TestCreateOrder:
    def test_reserves_stock(self, book, place_order):
        order = place_order((book, 3))

        assert _stock(book) == 7
        assert OrderModel.objects.filter(id=order.id).exists()

    def test_duplicate_lines_merge(self, book, place_order):
        order = place_order((book, 1), (book, 2))

        assert len(order.items) == 1
        assert order.items[0].quantity == 3
        assert _stock(book) == 7

    def test_insufficient_stock_persists_nothing(self, new_book, persist, place_order):
        book = persist(new_book(title="Rare Edition", stock_quantity=2))

        with pytest.raises(InsufficientStock) as exc_info:
            place_order((book, 5))

        assert str(exc_info.value) == (
            "Insufficient stock for book 'Rare Edition'. Available: 2, Requested: 5"
        )
        assert OrderModel.objects.count() == 0
        assert _stock(book) == 2

    def test_failure_on_second_line_undoes_first_reservation(
        self, book, new_book, persist, place_order
    ):
        scarce = persist(new_book(isbn="9780000000003", stock_quantity=1))

        with pytest.raises(InsufficientStock):
            place_order((book, 4), (scarce, 2))

        assert _stock(book) == 10
        assert OrderModel.objects.count() == 0


class TestOrderLifecycle:
    def test_delete_pending_restores_stock(self, book, place_order):
        order = place_order((book, 3))
        assert _stock(book) == 7

        assert _service().delete_order(order.id) is True

        assert _stock(book) == 10
        assert not OrderModel.objects.filter(id=order.id).exists()

    def test_cancel_releases_stock_once(self, book, place_order):
        order = place_order((book, 4))

        _service().update_order_status(order.id, OrderStatus.CANCELLED)
        _service().update_order_status(order.id, OrderStatus.CANCELLED)
        assert _stock(book) == 10

        assert _service().delete_order(order.id) is True
        assert _stock(book) == 10

    def test_cancel_after_shipping_keeps_stock(self, book, place_order):
        order = place_order((book, 4))
        for status in (OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.CANCELLED):
            _service().update_order_status(order.id, status)

        assert OrderModel.objects.get(id=order.id).status == OrderStatus.CANCELLED
        assert _stock(book) == 6

    def test_ship_pending_order_rejected(self, book, place_order):
        order = place_order((book, 1))

        with pytest.raises(InvalidStatusTransition):
            _service().update_order_status(order.id, OrderStatus.SHIPPED)

        assert OrderModel.objects.get(id=order.id).status == OrderStatus.PENDING

    def test_full_lifecycle_sets_dates(self, book, place_order):
        order = place_order((book, 1))
        for status in (OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            _service().update_order_status(order.id, status)

        row = OrderModel.objects.get(id=order.id)
        assert row.status == OrderStatus.DELIVERED
        assert row.shipped_date is not None
        assert row.delivered_date is not None

    def test_add_item_reserves_and_updates_totals(self, book, place_order):
        order = place_order((book, 1))

        updated = _service().add_order_item(order.id, AddOrderItemDTO(book_id=book.id, quantity=1))

        assert updated.items[0].quantity == 2
        assert updated.subtotal == Decimal("91.98")
        assert _stock(book) == 8
        assert OrderModel.objects.get(id=order.id).total == Decimal("99.3384")


class TestCustomerDeletion:
    def test_pending_order_blocks_customer_delete(self, customer, book, place_order):
        place_order((book, 1))

        with pytest.raises(CustomerHasActiveOrders):
            CustomerService(DjangoUnitOfWork()).delete_customer(customer.id)

    def test_customer_with_cancelled_orders_can_be_deleted(self, customer, book, place_order):
        order = place_order((book, 1))
        _service().update_order_status(order.id, OrderStatus.CANCELLED)

        assert CustomerService(DjangoUnitOfWork()).delete_customer(customer.id) is True
        assert not OrderModel.objects.filter(id=order.id).exists()
