"""
Domain-specific exceptions for the XP app.

Each one also derives from the shared error kind so the API layer maps it to
the right status code without per-view handling.
"""

from apps.core.exceptions import (
    BudgetExceededError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)


class XPServiceError(DomainError):
    """Base exception for all XP service errors."""
    pass


class GranterNotAllowedError(XPServiceError, ForbiddenError):
    """Raised when the granter is missing or is not a teacher/operator."""
    pass


class StudentNotFoundError(XPServiceError, NotFoundError):
    pass


class DailyBudgetExceededError(XPServiceError, BudgetExceededError):
    """Raised when a grant would push a teacher past today's budget."""
    pass


class InvalidGrantAmountError(XPServiceError, InvalidStateError):
    pass


class DuplicateGrantError(XPServiceError, ConflictError):
    """Raised when a concurrent retry inserted the same grant first."""
    pass


class TeacherNotFoundError(XPServiceError, NotFoundError):
    pass
