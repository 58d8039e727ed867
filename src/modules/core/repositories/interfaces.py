"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Writes (``add``, ``update``, ``delete``) are staged and only reach the
database when the owning unit of work calls ``save_changes()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Book``, ``Order``).
    """

    @abstractmethod
    def get_by_id(self, id: UUID | str) -> Optional[T]:
        """Retrieve an entity by its primary key, ``None`` if missing."""

    @abstractmethod
    def get_all(self) -> List[T]:
        """Return every entity."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List entities matching optional query filters."""

    @abstractmethod
    def add(self, entity: T) -> T:
        """Stage the insertion of a new entity."""

    @abstractmethod
    def update(self, entity: T) -> T:
        """Stage the update of an existing entity."""

    @abstractmethod
    def delete(self, id: UUID | str) -> None:
        """Stage the removal of an entity by ID."""

    @abstractmethod
    def exists(self, id: UUID | str) -> bool:
        """Return ``True`` if an entity with the given ID exists."""
