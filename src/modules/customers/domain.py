"""Customer entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from modules.customers.constants import CustomerStatus
from shared.domain.entity import BaseEntity, require_text, utcnow
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import Address


class Customer(BaseEntity):
    """A registered customer.

    ``activate()`` and ``deactivate()`` are unconditional: any status may
    move to Active or Inactive.  Suspended and Banned are storable values
    but no entity method produces them.
    """

    def __init__(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: str,
        address: Address,
        id: Optional[UUID] = None,
    ) -> None:
        require_text(first_name, "First name cannot be empty.")
        require_text(last_name, "Last name cannot be empty.")
        require_text(email, "Email cannot be empty.")
        require_text(phone_number, "Phone number cannot be empty.")
        if address is None:
            raise ValidationError("Address cannot be null.")

        super().__init__(id)
        self._first_name = first_name
        self._last_name = last_name
        self._email = email
        self._phone_number = phone_number
        self._address = address
        self._status = CustomerStatus.ACTIVE
        self._registration_date = self._created_at
        self._last_login_date: Optional[datetime] = None

    @classmethod
    def restore(
        cls,
        *,
        id: UUID,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: str,
        address: Address,
        status: str,
        registration_date: datetime,
        last_login_date: Optional[datetime],
        created_at: datetime,
        updated_at: Optional[datetime],
    ) -> Customer:
        customer = cls._blank(id, created_at, updated_at)
        customer._first_name = first_name
        customer._last_name = last_name
        customer._email = email
        customer._phone_number = phone_number
        customer._address = address
        customer._status = CustomerStatus(status)
        customer._registration_date = registration_date
        customer._last_login_date = last_login_date
        return customer

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str:
        return self._email

    @property
    def phone_number(self) -> str:
        return self._phone_number

    @property
    def address(self) -> Address:
        return self._address

    @property
    def status(self) -> CustomerStatus:
        return self._status

    @property
    def registration_date(self) -> datetime:
        return self._registration_date

    @property
    def last_login_date(self) -> Optional[datetime]:
        return self._last_login_date

    def update_contact_info(self, email: str, phone_number: str) -> None:
        require_text(email, "Email cannot be empty.")
        require_text(phone_number, "Phone number cannot be empty.")
        self._email = email
        self._phone_number = phone_number
        self._touch()

    def update_name(self, first_name: str, last_name: str) -> None:
        require_text(first_name, "First name cannot be empty.")
        require_text(last_name, "Last name cannot be empty.")
        self._first_name = first_name
        self._last_name = last_name
        self._touch()

    def update_address(self, address: Address) -> None:
        if address is None:
            raise ValidationError("Address cannot be null.")
        self._address = address
        self._touch()

    def activate(self) -> None:
        self._status = CustomerStatus.ACTIVE
        self._touch()

    def deactivate(self) -> None:
        self._status = CustomerStatus.INACTIVE
        self._touch()

    def update_last_login(self) -> None:
        self._last_login_date = utcnow()
        self._touch()

    def __repr__(self) -> str:
        return f"<Customer {self._id} {self.full_name!r} {self._status}>"
