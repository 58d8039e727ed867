"""Base entity for framework-agnostic domain objects.

Entities keep their state in private attributes and expose it through
read-only properties; every mutation goes through an explicit method
that validates input and calls ``_touch()``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

import uuid6

from shared.domain.exceptions import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_text(value: Optional[str], message: str) -> None:
    """Raise ``ValidationError`` when *value* is ``None``, empty or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(message)


class BaseEntity:
    """Identity (UUIDv7) plus ``created_at`` / ``updated_at`` bookkeeping."""

    _id: UUID
    _created_at: datetime
    _updated_at: Optional[datetime]

    def __init__(self, id: Optional[UUID] = None) -> None:
        self._id = id or uuid6.uuid7()
        self._created_at = utcnow()
        self._updated_at = None

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> Optional[datetime]:
        return self._updated_at

    def _touch(self) -> None:
        self._updated_at = utcnow()

    @classmethod
    def _blank(cls, id: UUID, created_at: datetime, updated_at: Optional[datetime]) -> Any:
        """Allocate an instance without running constructor validation.

        Used by repositories to rebuild entities from persisted rows.
        """
        entity = cls.__new__(cls)
        entity._id = id
        entity._created_at = created_at
        entity._updated_at = updated_at
        return entity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseEntity) or type(other) is not type(self):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))
