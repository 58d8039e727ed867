"""Change tracking shared by the repositories of one unit of work.

``ChangeTracker`` holds two things:

- an identity map, so an aggregate loaded twice through the same unit
  of work is the same in-memory object;
- the ordered queue of staged writes.  Each write is a callable that
  performs the SQL and returns the number of affected rows.  Writes
  read entity state when they run, so the latest in-memory state is
  what gets persisted.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Optional
from uuid import UUID

import structlog

logger = structlog.get_logger(__name__)

Operation = Callable[[], int]


def coerce_uuid(value: Any) -> Optional[UUID]:
    """Return *value* as a ``UUID``, or ``None`` if it is not a valid one."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class ChangeTracker:
    def __init__(self) -> None:
        self._identity_map: Dict[tuple[str, UUID], Any] = {}
        self._pending: Dict[Hashable, Operation] = {}

    # ------------------------------------------------------------------
    # Identity map
    # ------------------------------------------------------------------

    def get(self, kind: str, id: UUID) -> Optional[Any]:
        return self._identity_map.get((kind, id))

    def track(self, kind: str, entity: Any) -> Any:
        """Register *entity* and return the canonical instance for its ID."""
        key = (kind, entity.id)
        tracked = self._identity_map.get(key)
        if tracked is not None:
            return tracked
        self._identity_map[key] = entity
        return entity

    def forget(self, kind: str, id: UUID) -> None:
        self._identity_map.pop((kind, id), None)

    # ------------------------------------------------------------------
    # Staged writes
    # ------------------------------------------------------------------

    def stage(self, key: Hashable, operation: Operation) -> None:
        """Queue *operation*; a key that is already queued is kept once."""
        if key not in self._pending:
            self._pending[key] = operation

    def is_staged(self, key: Hashable) -> bool:
        return key in self._pending

    def unstage(self, key: Hashable) -> None:
        self._pending.pop(key, None)

    @property
    def has_changes(self) -> bool:
        return bool(self._pending)

    def flush(self) -> int:
        """Run every staged write in order and return the affected rows.

        The queue is only cleared once every write has succeeded; the
        caller is responsible for wrapping this in a transaction.
        """
        affected = 0
        for key, operation in list(self._pending.items()):
            affected += operation()
            logger.debug("uow.write_flushed", operation=str(key))
        self._pending.clear()
        return affected

    def clear(self) -> None:
        self._pending.clear()
        self._identity_map.clear()
