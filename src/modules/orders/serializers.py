"""Order DRF serializers for API input.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.serializers import AddressSerializer
from modules.orders.constants import NOTES_MAX_LENGTH, OrderStatus, PaymentMethod


class OrderItemSerializer(serializers.Serializer):
    """Validates a single order line."""

    book_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    customer_id = serializers.UUIDField()
    shipping_address = AddressSerializer()
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    notes = serializers.CharField(
        max_length=NOTES_MAX_LENGTH, required=False, allow_null=True, allow_blank=True
    )
    items = OrderItemSerializer(many=True, allow_empty=False)


class UpdateOrderSerializer(serializers.Serializer):
    """Validates an order shipping address / notes update."""

    shipping_address = AddressSerializer()
    notes = serializers.CharField(
        max_length=NOTES_MAX_LENGTH, required=False, allow_null=True, allow_blank=True
    )


class OrderStatusSerializer(serializers.Serializer):
    """Validates a status change request."""

    status = serializers.ChoiceField(choices=OrderStatus.choices)
