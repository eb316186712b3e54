class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedRecordError(DomainError):
    """Raised when a historical attendance record breaks its storage contract."""


class StoreUnavailableError(DomainError):
    """Raised when a backing store cannot be reached or answers unexpectedly."""
