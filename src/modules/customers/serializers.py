"""Customer DRF serializers for API input.

The serializer operates at the Interface layer (API Views).
It handles HTTP-level concerns: request parsing and field-level
validation.  Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``; responses are rendered from the output
DTOs.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.serializers import AddressSerializer
from modules.customers.constants import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    CustomerStatus,
)


class CustomerSerializer(serializers.Serializer):
    """Validates customer create and update payloads."""

    first_name = serializers.CharField(max_length=NAME_MAX_LENGTH)
    last_name = serializers.CharField(max_length=NAME_MAX_LENGTH)
    email = serializers.EmailField(max_length=EMAIL_MAX_LENGTH)
    phone_number = serializers.CharField(max_length=PHONE_MAX_LENGTH)
    address = AddressSerializer()


class CustomerStatusSerializer(serializers.Serializer):
    """Validates a status change request."""

    status = serializers.ChoiceField(choices=CustomerStatus.choices)
