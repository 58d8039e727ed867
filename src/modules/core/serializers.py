"""Serializers shared by the customer and order APIs."""

from __future__ import annotations

from rest_framework import serializers


class AddressSerializer(serializers.Serializer):
    """Validates an embedded address payload."""

    street = serializers.CharField(max_length=200)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=50)
    zip_code = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=100)
