"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer maps them to HTTP responses through the shared
exception hierarchy.
"""

from __future__ import annotations

from shared.domain.exceptions import AlreadyExistsError, NotFoundError, StateConflictError


class CustomerAlreadyExists(AlreadyExistsError):
    """Another customer already uses the same email address."""


class CustomerNotFound(NotFoundError):
    """The requested customer does not exist."""


class CustomerHasActiveOrders(StateConflictError):
    """The customer still has orders that are not Delivered or Cancelled."""


class InvalidCustomerStatus(StateConflictError):
    """The requested customer status is not a valid target."""
