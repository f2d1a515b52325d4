class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class LedgerFullError(ValidationError):
    """Raised when an account already tracks the maximum number of roll numbers."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks the shared secret for an action."""


class StoreError(DomainError):
    """Raised when reading from or committing to the record store fails."""
