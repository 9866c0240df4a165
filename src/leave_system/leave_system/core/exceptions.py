class DomainError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(DomainError):
    """Raised when an employee, request or attendance record does not exist."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class QuotaExceededError(DomainError):
    """Raised when the monthly leave allowance cannot cover a request."""

    def __init__(self, message: str, *, remaining: int):
        super().__init__(message)
        self.remaining = remaining


class InvalidTransitionError(DomainError):
    """Raised when a leave request cannot move to the requested status."""


class InvalidStateError(DomainError):
    """Raised when a ledger operation targets a record that is not an alpha."""


class ConcurrentUpdateError(DomainError):
    """Raised when a conditional write lost a race with another writer."""
