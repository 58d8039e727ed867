"""Integration tests for the order API."""

from __future__ import annotations

import pytest

from modules.books.models import BookModel
from modules.orders.models import OrderModel

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


@pytest.fixture()
def order_payload(customer, book, address_payload):
    return {
        "customer_id": str(customer.id),
        "shipping_address": address_payload,
        "payment_method": "CreditCard",
        "notes": "Please gift wrap",
        "items": [{"book_id": str(book.id), "quantity": 2}],
    }


@pytest.fixture()
def created_order(staff_client, order_payload):
    response = staff_client.post(URL, order_payload, format="json")
    assert response.status_code == 201
    return response.json()


def _set_status(client, order_id, status):
    return client.put(f"{URL}{order_id}/status/", {"status": status}, format="json")


class TestOrderCreate:
    def test_create(self, created_order, book):
        assert created_order["status"] == "Pending"
        assert created_order["subtotal"] == "91.98"
        assert created_order["tax"] == "7.3584"
        assert created_order["shipping_cost"] == "0"
        assert created_order["total"] == "99.3384"
        assert created_order["items"][0]["quantity"] == 2
        assert BookModel.objects.get(id=book.id).stock_quantity == 8

    def test_regular_user_cannot_create(self, user_client, order_payload):
        assert user_client.post(URL, order_payload, format="json").status_code == 403

    def test_unknown_customer(self, staff_client, order_payload):
        order_payload["customer_id"] = "0192f0c1-0000-7000-8000-000000000000"
        response = staff_client.post(URL, order_payload, format="json")

        assert response.status_code == 404
        assert response.json()["errors"][0]["detail"] == (
            "Customer with ID 0192f0c1-0000-7000-8000-000000000000 not found"
        )

    def test_insufficient_stock(self, staff_client, order_payload, book):
        order_payload["items"][0]["quantity"] = 50
        response = staff_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["code"] == "insufficient_stock"
        assert error["detail"] == "Insufficient stock for book 'Dune'. Available: 10, Requested: 50"
        assert OrderModel.objects.count() == 0

    def test_empty_items_rejected(self, staff_client, order_payload):
        order_payload["items"] = []
        response = staff_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "items"


class TestOrderRead:
    def test_retrieve(self, user_client, created_order):
        response = user_client.get(f"{URL}{created_order['id']}/")

        assert response.status_code == 200
        assert response.json()["notes"] == "Please gift wrap"

    def test_list_filter_by_status(self, user_client, created_order):
        assert user_client.get(URL, {"status": "Pending"}).json()["count"] == 1
        assert user_client.get(URL, {"status": "Shipped"}).json()["count"] == 0

    def test_by_customer(self, user_client, created_order, customer):
        response = user_client.get(f"{URL}customer/{customer.id}/")

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["results"]] == [created_order["id"]]

    def test_by_status(self, user_client, created_order):
        response = user_client.get(f"{URL}status/Pending/")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_by_unknown_status(self, user_client):
        assert user_client.get(f"{URL}status/Lost/").status_code == 400


class TestOrderItems:
    def test_any_user_can_add_items(self, user_client, created_order, book):
        response = user_client.post(
            f"{URL}{created_order['id']}/items/",
            {"book_id": str(book.id), "quantity": 1},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 3
        assert BookModel.objects.get(id=book.id).stock_quantity == 7

    def test_cannot_add_to_confirmed_order(self, staff_client, created_order, book):
        _set_status(staff_client, created_order["id"], "Confirmed")

        response = staff_client.post(
            f"{URL}{created_order['id']}/items/",
            {"book_id": str(book.id), "quantity": 1},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "order_not_modifiable"


class TestOrderStatus:
    def test_ship_pending_rejected(self, staff_client, created_order):
        response = _set_status(staff_client, created_order["id"], "Shipped")

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "invalid_status_transition"
        assert OrderModel.objects.get(id=created_order["id"]).status == "Pending"

    def test_lifecycle(self, staff_client, created_order):
        for status in ("Confirmed", "Shipped", "Delivered"):
            response = _set_status(staff_client, created_order["id"], status)
            assert response.status_code == 200
            assert response.json()["status"] == status
        assert response.json()["delivered_date"] is not None

    def test_cancel_releases_stock(self, staff_client, created_order, book):
        response = _set_status(staff_client, created_order["id"], "Cancelled")

        assert response.status_code == 200
        assert BookModel.objects.get(id=book.id).stock_quantity == 10

    def test_unknown_order(self, staff_client):
        response = _set_status(staff_client, "0192f0c1-0000-7000-8000-000000000000", "Confirmed")
        assert response.status_code == 404

    def test_status_route_without_trailing_slash(self, staff_client, created_order):
        response = staff_client.put(
            f"{URL}{created_order['id']}/status", {"status": "Confirmed"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Confirmed"


class TestOrderUpdateDelete:
    def test_update_address(self, staff_client, created_order, address_payload):
        address_payload["city"] = "Oxford"
        response = staff_client.put(
            f"{URL}{created_order['id']}/",
            {"shipping_address": address_payload, "notes": "Back door"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["shipping_address"]["city"] == "Oxford"
        assert response.json()["notes"] == "Back door"

    def test_delete_pending_restores_stock(self, staff_client, created_order, book):
        response = staff_client.delete(f"{URL}{created_order['id']}/")

        assert response.status_code == 204
        assert BookModel.objects.get(id=book.id).stock_quantity == 10

    def test_delete_shipped_rejected(self, staff_client, created_order):
        _set_status(staff_client, created_order["id"], "Confirmed")
        _set_status(staff_client, created_order["id"], "Shipped")

        response = staff_client.delete(f"{URL}{created_order['id']}/")

        assert response.status_code == 400
        assert OrderModel.objects.filter(id=created_order["id"]).exists()

    def test_book_in_order_cannot_be_deleted(self, staff_client, created_order, book):
        response = staff_client.delete(f"/api/v1/books/{book.id}/")

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "book_in_use"
