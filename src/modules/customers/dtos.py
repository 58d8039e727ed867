"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateCustomerDTO``: input for customer creation.
- ``UpdateCustomerDTO``: input for name, contact and address changes.
- ``CustomerOutputDTO``: output with all customer fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from modules.core.dtos import AddressDTO
from modules.customers.constants import CustomerStatus

if TYPE_CHECKING:
    from modules.customers.domain import Customer


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer creation requests.

    Validates:
    - ``email`` is a well-formed address (Pydantic ``EmailStr``) and is
      normalised to lowercase.
    """

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    email: EmailStr
    phone_number: str
    address: AddressDTO

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class UpdateCustomerDTO(CreateCustomerDTO):
    """Immutable DTO for customer update requests (all fields replaced)."""


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class CustomerOutputDTO(BaseModel):
    """Immutable DTO for customer API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: str
    address: AddressDTO
    status: CustomerStatus
    registration_date: datetime
    last_login_date: Optional[datetime]
    created_at: datetime
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerOutputDTO:
        """Build an output DTO from a ``Customer`` entity."""
        return cls(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            full_name=customer.full_name,
            email=customer.email,
            phone_number=customer.phone_number,
            address=AddressDTO.from_value_object(customer.address),
            status=customer.status,
            registration_date=customer.registration_date,
            last_login_date=customer.last_login_date,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )
