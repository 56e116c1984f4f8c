"""Domain-level exceptions.

All failures the core can report are expressed as subclasses of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.  Transient failures (the store is down, a
collaborator is slow) share a base class so callers can decide to retry
without string-matching error messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is missing or malformed, or a business rule was violated."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """A special price referenced a product the catalog does not know."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with ID '{product_id}' not found")
        self.product_id = product_id


class TransientError(DomainException):
    """A failure that may succeed if retried later (with backoff)."""


class StorageUnavailableError(TransientError):
    """The backing store cannot be reached or is not ready."""


class OperationTimeoutError(TransientError):
    """A collaborator call exceeded its time bound."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"'{operation}' timed out after {timeout:g}s")
        self.operation = operation
        self.timeout = timeout
