"""Django implementation of ``IUnitOfWork``.

The transaction is a manually entered ``transaction.atomic`` block.
When the unit of work runs inside an outer atomic block (e.g. a test
case) Django turns it into a savepoint, so commit and rollback only
affect the work done here.
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.db import DEFAULT_DB_ALIAS, transaction

from modules.books.repositories.django_repository import BookDjangoRepository
from modules.core.repositories.tracking import ChangeTracker
from modules.core.unit_of_work.interfaces import IUnitOfWork
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository

logger = structlog.get_logger(__name__)


class DjangoUnitOfWork(IUnitOfWork):
    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using
        self._tracker = ChangeTracker()
        self._atomic: Optional[transaction.Atomic] = None
        self.books = BookDjangoRepository(self._tracker, using)
        self.customers = CustomerDjangoRepository(self._tracker, using)
        self.orders = OrderDjangoRepository(self._tracker, using)

    @property
    def has_active_transaction(self) -> bool:
        return self._atomic is not None

    def begin_transaction(self) -> None:
        if self._atomic is not None:
            return
        atomic = transaction.atomic(using=self._using)
        atomic.__enter__()
        self._atomic = atomic
        logger.debug("uow.transaction_started")

    def commit_transaction(self) -> None:
        """Commit the open transaction.

        If the commit itself fails, ``Atomic`` rolls the transaction back
        before the database error is re-raised.
        """
        if self._atomic is None:
            return
        atomic, self._atomic = self._atomic, None
        try:
            atomic.__exit__(None, None, None)
        except Exception:
            self._tracker.clear()
            logger.error("uow.commit_failed")
            raise
        logger.debug("uow.transaction_committed")

    def rollback_transaction(self) -> None:
        if self._atomic is None:
            return
        atomic, self._atomic = self._atomic, None
        transaction.set_rollback(True, using=self._using)
        atomic.__exit__(None, None, None)
        self._tracker.clear()
        logger.info("uow.transaction_rolled_back")

    def save_changes(self) -> int:
        with transaction.atomic(using=self._using):
            affected = self._tracker.flush()
        logger.debug("uow.changes_saved", affected_rows=affected)
        return affected

    def close(self) -> None:
        self.rollback_transaction()
        self._tracker.clear()
        connection = transaction.get_connection(self._using)
        if not connection.in_atomic_block:
            connection.close_if_unusable_or_obsolete()
