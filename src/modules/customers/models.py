"""Customer persistence model.

The customer's ``Address`` value object is stored as embedded columns.
Email is unique across customers.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.customers.constants import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    CustomerStatus,
)
from shared.domain.value_objects import Address


class CustomerModel(BaseModel):
    """Row for the ``Customer`` entity (see ``modules.customers.domain``)."""

    first_name = models.CharField(max_length=NAME_MAX_LENGTH)
    last_name = models.CharField(max_length=NAME_MAX_LENGTH)
    email = models.EmailField(max_length=EMAIL_MAX_LENGTH, unique=True)
    phone_number = models.CharField(max_length=PHONE_MAX_LENGTH)
    street = models.CharField(max_length=200)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=50)
    zip_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100)
    status = models.CharField(
        max_length=20,
        choices=CustomerStatus.choices,
        default=CustomerStatus.ACTIVE,
    )
    registration_date = models.DateTimeField()
    last_login_date = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        db_table = "customers"
        ordering = ["last_name", "first_name"]
        indexes = [
            models.Index(fields=["status"], name="customers_status_idx"),
        ]

    @property
    def address(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} <{self.email}>"
