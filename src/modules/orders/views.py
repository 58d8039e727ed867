"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.  Domain
exceptions propagate to ``standard_exception_handler``, which maps them
to HTTP status codes.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle

from modules.core.viewsets import UnitOfWorkViewSet
from modules.orders.constants import OrderStatus
from modules.orders.dtos import AddOrderItemDTO, CreateOrderDTO, UpdateOrderDTO
from modules.orders.filters import OrderFilter
from modules.orders.models import OrderModel
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderItemSerializer,
    OrderStatusSerializer,
    UpdateOrderSerializer,
)
from modules.orders.services import OrderService
from shared.domain.exceptions import ValidationError


class OrderViewSet(UnitOfWorkViewSet):
    """ViewSet for Order operations.

    Any authenticated user may add items to an order; every other write
    requires a staff user.
    """

    service_class = OrderService
    queryset = OrderModel.objects.none()
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]
    open_write_actions = ("items",)

    def get_throttles(self) -> list[BaseThrottle]:
        """Per-action throttling scopes."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve", "by_customer", "by_status"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filters: ``status``, ``customer``, ``payment_method``,
        ``start_date``, ``end_date``, ``min_total``, ``max_total``.
        """
        orders = self._service.list_orders(self.query_filters(request))
        return self.paginated(request, orders)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(pk)
        if order is None:
            return self.not_found(f"Order with ID {pk} not found")
        return self.one(order)

    @action(detail=False, methods=["get"], url_path=r"customer/(?P<customer_id>[^/.]+)")
    def by_customer(self, request: Request, customer_id: str) -> Response:
        """GET /api/v1/orders/customer/{customer_id}/"""
        return self.paginated(request, self._service.list_orders_by_customer(customer_id))

    @action(detail=False, methods=["get"], url_path=r"status/(?P<order_status>[^/.]+)")
    def by_status(self, request: Request, order_status: str) -> Response:
        """GET /api/v1/orders/status/{status}/"""
        if order_status not in OrderStatus.values:
            raise ValidationError(f"Invalid order status {order_status}")
        return self.paginated(request, self._service.list_orders_by_status(order_status))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.create_order(CreateOrderDTO(**serializer.validated_data))
        return self.one(order, status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/"""
        serializer = UpdateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.update_order(pk, UpdateOrderDTO(**serializer.validated_data))
        return self.one(order)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/

        Only Pending or Cancelled orders can be deleted.
        """
        if not self._service.delete_order(pk):
            return self.not_found(f"Order with ID {pk} not found")
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Items / Status
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def items(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/items/

        Adds a line (merged with an existing one for the same book) and
        reserves its stock.
        """
        serializer = OrderItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.add_order_item(
            pk, AddOrderItemDTO(**serializer.validated_data)
        )
        return self.one(order)

    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/status/

        Cancelling a Pending or Confirmed order releases its reserved stock.
        """
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.update_order_status(pk, serializer.validated_data["status"])
        return self.one(order)
