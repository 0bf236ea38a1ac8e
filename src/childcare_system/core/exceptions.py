class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class StoreError(Exception):
    """Raised by document store implementations when a remote call fails."""


class DocumentNotFoundError(StoreError):
    """Raised when updating a document that does not exist."""


class OperationFailedError(DomainError):
    """Raised when a remote write failed; the message is user-facing."""
