class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the bearer token is missing, invalid or expired."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record or employee does not exist."""


class ConflictError(DomainError):
    """Raised when an action conflicts with the current state of a record."""


class DuplicateRecordError(ConflictError):
    """Raised by repositories when a unique key rejects an insert."""
