"""Domain-level exceptions.

Services and repositories raise these errors to express business rule
violations and infrastructure failures. Route handlers catch them and map
to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ConflictError(DomainError):
    """Entity with the same unique key already exists."""


class UnauthorizedError(DomainError):
    """Credentials were rejected."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class StoreError(DomainError):
    """The backing store failed for a reason not covered above."""
