"""Order repository interface.

Extends ``IRepository[Order]`` with the look-ups required by the
order workflows.  The Order aggregate includes its OrderItem children:
``add``/``update`` persist the items together with the root and
``delete`` removes them with it.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.domain import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def get_by_customer_id(self, customer_id: UUID | str) -> List[Order]:
        """Orders placed by a customer, newest first."""

    @abstractmethod
    def get_by_status(self, status: str) -> List[Order]:
        """Orders in the given ``OrderStatus``."""

    @abstractmethod
    def get_by_date_range(self, start: datetime, end: datetime) -> List[Order]:
        """Orders whose ``order_date`` falls within [start, end]."""

    @abstractmethod
    def exists_with_book(self, book_id: UUID | str) -> bool:
        """Return ``True`` if any order item references the book."""
