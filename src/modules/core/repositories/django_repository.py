"""Django ORM base for unit-of-work aware repositories.

Reads go through the shared ``ChangeTracker`` identity map; writes are
staged on the tracker and executed by ``IUnitOfWork.save_changes()``.
Concrete repositories provide the row <-> entity mapping.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar
from uuid import UUID

import django_filters
from django.db import DEFAULT_DB_ALIAS, models

from modules.core.repositories.tracking import ChangeTracker, coerce_uuid
from shared.domain.exceptions import ValidationError

T = TypeVar("T")


class TrackedDjangoRepository(Generic[T]):
    """Shared CRUD plumbing; subclasses set ``model``, ``kind`` and mappers."""

    model: type[models.Model]
    kind: str
    filterset_class: Optional[type[django_filters.FilterSet]] = None

    def __init__(self, tracker: ChangeTracker, using: str = DEFAULT_DB_ALIAS) -> None:
        self._tracker = tracker
        self._using = using

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @abstractmethod
    def _to_entity(self, row: Any) -> T:
        """Build a domain entity from an ORM row."""

    @abstractmethod
    def _to_fields(self, entity: T) -> Dict[str, Any]:
        """Column values for *entity*, excluding the primary key."""

    def _queryset(self) -> models.QuerySet:
        return self.model.objects.using(self._using)

    def _materialize(self, rows: Iterable[Any]) -> List[T]:
        return [self._track_row(row) for row in rows]

    def _track_row(self, row: Any) -> T:
        tracked = self._tracker.get(self.kind, row.id)
        if tracked is not None:
            return tracked
        return self._tracker.track(self.kind, self._to_entity(row))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, id: UUID | str) -> Optional[T]:
        """Return the tracked entity, loading it on first access.

        Returns ``None`` for unknown, malformed or staged-for-delete IDs.
        """
        uid = coerce_uuid(id)
        if uid is None or self._tracker.is_staged(("delete", self.kind, uid)):
            return None
        tracked = self._tracker.get(self.kind, uid)
        if tracked is not None:
            return tracked
        row = self._queryset().filter(id=uid).first()
        return self._track_row(row) if row is not None else None

    def get_all(self) -> List[T]:
        return self._materialize(self._queryset())

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List entities through ``filterset_class``.

        Raises:
            ValidationError: a filter value is malformed.
        """
        if not filters or self.filterset_class is None:
            return self.get_all()
        filterset = self.filterset_class(filters, queryset=self._queryset())
        if not filterset.is_valid():
            errors = "; ".join(
                f"{field}: {' '.join(messages)}"
                for field, messages in filterset.errors.items()
            )
            raise ValidationError(f"Invalid filters. {errors}")
        return self._materialize(filterset.qs)

    def exists(self, id: UUID | str) -> bool:
        uid = coerce_uuid(id)
        if uid is None:
            return False
        return self._queryset().filter(id=uid).exists()

    # ------------------------------------------------------------------
    # Staged writes
    # ------------------------------------------------------------------

    def add(self, entity: T) -> T:
        entity = self._tracker.track(self.kind, entity)
        self._tracker.stage(("add", self.kind, entity.id), lambda: self._insert(entity))
        return entity

    def update(self, entity: T) -> T:
        entity = self._tracker.track(self.kind, entity)
        if not self._tracker.is_staged(("add", self.kind, entity.id)):
            self._tracker.stage(
                ("update", self.kind, entity.id), lambda: self._write(entity)
            )
        return entity

    def delete(self, id: UUID | str) -> None:
        uid = coerce_uuid(id)
        if uid is None:
            return
        self._tracker.forget(self.kind, uid)
        self._tracker.unstage(("update", self.kind, uid))
        if self._tracker.is_staged(("add", self.kind, uid)):
            self._tracker.unstage(("add", self.kind, uid))
            return
        self._tracker.stage(("delete", self.kind, uid), lambda: self._remove(uid))

    # ------------------------------------------------------------------
    # SQL executed on flush
    # ------------------------------------------------------------------

    def _insert(self, entity: T) -> int:
        self._queryset().create(id=entity.id, **self._to_fields(entity))
        return 1

    def _write(self, entity: T) -> int:
        return self._queryset().filter(id=entity.id).update(**self._to_fields(entity))

    def _remove(self, id: UUID) -> int:
        deleted, _ = self._queryset().filter(id=id).delete()
        return deleted
