"""Unit of Work contract.

Coordinates the Book, Customer and Order repositories under one
transaction boundary.  Services receive an ``IUnitOfWork`` through
their constructor and never open transactions implicitly.

Contract:
- ``begin_transaction`` is idempotent: no-op if one is already open.
- ``commit_transaction`` rolls back and re-raises if the commit fails.
- ``rollback_transaction`` is a no-op when no transaction is open.
- ``save_changes`` flushes staged repository writes and returns the
  number of affected rows; persistence errors propagate unmodified.
- At most one transaction is open per instance.
- Used as a context manager, the unit of work releases its connection
  on exit regardless of the transaction outcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from modules.books.repositories.interfaces import IBookRepository
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.repositories.interfaces import IOrderRepository


class IUnitOfWork(ABC):
    books: IBookRepository
    customers: ICustomerRepository
    orders: IOrderRepository

    @property
    @abstractmethod
    def has_active_transaction(self) -> bool:
        """``True`` between ``begin_transaction`` and commit/rollback."""

    @abstractmethod
    def begin_transaction(self) -> None:
        """Open a transaction unless one is already open."""

    @abstractmethod
    def commit_transaction(self) -> None:
        """Commit the open transaction."""

    @abstractmethod
    def rollback_transaction(self) -> None:
        """Roll back the open transaction and discard staged writes."""

    @abstractmethod
    def save_changes(self) -> int:
        """Flush staged writes and return the number of affected rows."""

    @abstractmethod
    def close(self) -> None:
        """Roll back any unfinished transaction and release the connection."""

    def __enter__(self) -> IUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
