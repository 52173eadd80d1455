# core/exceptions.py

class DomainError(Exception):
    """Base class for finance domain errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when a record or an argument is malformed."""


class NotFoundError(DomainError):
    """Raised when a project or record is not found."""


class BusinessRuleError(DomainError):
    """Raised when a ledger rule is violated (e.g. a cost type on an income record)."""
