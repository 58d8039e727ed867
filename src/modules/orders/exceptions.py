"""Order domain exceptions.

Raised by the ``Order`` aggregate and by ``OrderService``.  The API
layer maps them to HTTP responses through the shared exception
hierarchy (see ``modules.core.exceptions``).
"""

from __future__ import annotations

from shared.domain.exceptions import DomainException, NotFoundError, StateConflictError


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""


class InsufficientStock(DomainException):
    """A book does not have enough stock for the requested quantity."""


class OrderNotModifiable(StateConflictError):
    """The order's status does not allow changing its items or details."""


class InvalidStatusTransition(StateConflictError):
    """The requested status transition is not allowed from the current status."""
