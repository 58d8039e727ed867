"""Domain exception hierarchy shared by every bounded context.

Entities raise these synchronously when an invariant would be broken.
Services re-raise them unchanged after rolling back, and the API layer
maps them to HTTP status codes (see ``modules.core.exceptions``).

- ``DomainException``: base for every invariant violation.
- ``ValidationError``: invalid constructor/mutator input.
- ``StateConflictError``: operation incompatible with the lifecycle state.
- ``AlreadyExistsError``: uniqueness rule violated.
- ``NotFoundError``: lookup by identifier returned nothing.
"""

from __future__ import annotations


class DomainException(Exception):
    """A business rule or invariant was violated."""


class ValidationError(DomainException):
    """Input would leave an entity or value object in an invalid state."""


class StateConflictError(DomainException):
    """The aggregate's current lifecycle state does not allow the operation."""


class AlreadyExistsError(DomainException):
    """An aggregate with the same unique key already exists."""


class NotFoundError(DomainException):
    """The requested aggregate does not exist."""
