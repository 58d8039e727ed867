"""DTOs shared by the customer and order modules."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from shared.domain.value_objects import Address


class AddressDTO(BaseModel):
    """Immutable DTO mirroring the ``Address`` value object."""

    model_config = ConfigDict(frozen=True)

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def to_value_object(self) -> Address:
        """Build the value object; raises ``ValidationError`` on blank parts."""
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )

    @classmethod
    def from_value_object(cls, address: Address) -> AddressDTO:
        return cls(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
        )
