class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when submitted data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when an actor lacks the authority for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class CourseModuleNotFoundError(DomainError):
    """Raised when a training event has no resolvable course module."""


class RecordStoreError(DomainError):
    """Raised when the record store refuses a write."""
