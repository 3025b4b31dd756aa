class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an operation references a missing member or event."""


class ConflictError(DomainError):
    """Raised when a unique key is already taken on a path that requires absence."""


class CounterDriftError(DomainError):
    """Raised in strict mode when a delta would drive a point counter below zero."""


class StoreError(DomainError):
    """Raised when the underlying database fails."""


class StoreUnavailableError(StoreError):
    """Raised when the database cannot be reached or stays locked; not tied to one row."""
