"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Caller-supplied input is missing a required field or is empty."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ConflictError(DomainError):
    """Entity with the same unique key already exists."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Duplicate value for '{field}'")


class StoreError(DomainError):
    """The backing store failed for a reason other than a uniqueness violation."""
