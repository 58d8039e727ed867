"""Value objects shared across aggregates."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.entity import require_text


@dataclass(frozen=True)
class Address:
    """Postal address, immutable and compared by value.

    Owned by ``Customer`` and by ``Order`` (as the shipping address);
    persisted as embedded columns on the owner's table.
    """

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        require_text(self.street, "Street cannot be empty.")
        require_text(self.city, "City cannot be empty.")
        require_text(self.state, "State cannot be empty.")
        require_text(self.zip_code, "Zip code cannot be empty.")
        require_text(self.country, "Country cannot be empty.")

    @property
    def full_address(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}"

    def __str__(self) -> str:
        return self.full_address
