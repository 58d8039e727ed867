"""Customer repository interface.

Extends ``IRepository[Customer]`` with the email look-ups required by
the unique-email rule.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.domain import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email (case-insensitive)."""

    @abstractmethod
    def get_by_status(self, status: str) -> List[Customer]:
        """Customers in the given ``CustomerStatus``."""

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` if a customer already uses this email."""
