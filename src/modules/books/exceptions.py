"""Book domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer maps them to HTTP responses through the shared
exception hierarchy.
"""

from __future__ import annotations

from shared.domain.exceptions import AlreadyExistsError, NotFoundError, StateConflictError


class BookAlreadyExists(AlreadyExistsError):
    """A book with the same ISBN already exists."""


class BookNotFound(NotFoundError):
    """The requested book does not exist."""


class BookInUse(StateConflictError):
    """The book is referenced by order items and cannot be deleted."""
