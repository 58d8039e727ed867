"""Django ORM implementation of the Order repository.

Persists the Order aggregate (Order + OrderItems) as one unit: on
update, item rows missing from the aggregate are deleted and the rest
are upserted.  Items are prefetched on every read to avoid N+1 queries.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List
from uuid import UUID

import structlog

from modules.core.repositories.django_repository import TrackedDjangoRepository
from modules.core.repositories.tracking import coerce_uuid
from modules.orders.domain import Order, OrderItem
from modules.orders.filters import OrderFilter
from modules.orders.models import OrderItemModel, OrderModel
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(TrackedDjangoRepository[Order], IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    model = OrderModel
    kind = "order"
    filterset_class = OrderFilter

    def _queryset(self):
        return super()._queryset().prefetch_related("items")

    def _items(self):
        return OrderItemModel.objects.using(self._using)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def _to_entity(self, row: OrderModel) -> Order:
        items = [
            OrderItem.restore(
                id=item.id,
                order_id=item.order_id,
                book_id=item.book_id,
                unit_price=item.unit_price,
                quantity=item.quantity,
                created_at=item.created_at,
                updated_at=item.updated_at,
            )
            for item in row.items.all()
        ]
        return Order.restore(
            id=row.id,
            customer_id=row.customer_id,
            status=row.status,
            order_date=row.order_date,
            shipped_date=row.shipped_date,
            delivered_date=row.delivered_date,
            shipping_address=row.shipping_address,
            payment_method=row.payment_method,
            notes=row.notes,
            items=items,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _to_fields(self, entity: Order) -> Dict[str, Any]:
        address = entity.shipping_address
        return {
            "customer_id": entity.customer_id,
            "status": entity.status,
            "order_date": entity.order_date,
            "shipped_date": entity.shipped_date,
            "delivered_date": entity.delivered_date,
            "shipping_street": address.street,
            "shipping_city": address.city,
            "shipping_state": address.state,
            "shipping_zip_code": address.zip_code,
            "shipping_country": address.country,
            "payment_method": entity.payment_method,
            "subtotal": entity.subtotal,
            "tax": entity.tax,
            "shipping_cost": entity.shipping_cost,
            "total": entity.total,
            "notes": entity.notes,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    @staticmethod
    def _item_fields(item: OrderItem) -> Dict[str, Any]:
        return {
            "order_id": item.order_id,
            "book_id": item.book_id,
            "unit_price": item.unit_price,
            "quantity": item.quantity,
            "total_price": item.total_price,
            "created_at": item.created_at,
            "updated_at": item.updated_at,
        }

    # ------------------------------------------------------------------
    # SQL executed on flush
    # ------------------------------------------------------------------

    def _insert(self, entity: Order) -> int:
        OrderModel.objects.using(self._using).create(
            id=entity.id, **self._to_fields(entity)
        )
        items = self._items().bulk_create(
            [OrderItemModel(id=item.id, **self._item_fields(item)) for item in entity.items]
        )
        logger.info(
            "order.inserted",
            order_id=str(entity.id),
            item_count=len(items),
            total=str(entity.total),
        )
        return 1 + len(items)

    def _write(self, entity: Order) -> int:
        affected = OrderModel.objects.using(self._using).filter(id=entity.id).update(
            **self._to_fields(entity)
        )
        kept = [item.id for item in entity.items]
        removed, _ = self._items().filter(order_id=entity.id).exclude(id__in=kept).delete()
        for item in entity.items:
            self._items().update_or_create(id=item.id, defaults=self._item_fields(item))
        logger.info(
            "order.updated",
            order_id=str(entity.id),
            status=entity.status,
            item_count=len(kept),
        )
        return affected + removed + len(kept)

    def _remove(self, id: UUID) -> int:
        deleted, _ = OrderModel.objects.using(self._using).filter(id=id).delete()
        logger.info("order.deleted", order_id=str(id), affected_rows=deleted)
        return deleted

    # ------------------------------------------------------------------
    # Order-specific queries
    # ------------------------------------------------------------------

    def get_by_customer_id(self, customer_id: UUID | str) -> List[Order]:
        uid = coerce_uuid(customer_id)
        if uid is None:
            return []
        return self._materialize(self._queryset().filter(customer_id=uid))

    def get_by_status(self, status: str) -> List[Order]:
        return self._materialize(self._queryset().filter(status=status))

    def get_by_date_range(self, start: datetime, end: datetime) -> List[Order]:
        return self._materialize(self._queryset().filter(order_date__range=(start, end)))

    def exists_with_book(self, book_id: UUID | str) -> bool:
        uid = coerce_uuid(book_id)
        if uid is None:
            return False
        return self._items().filter(book_id=uid).exists()
