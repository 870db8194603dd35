"""Domain-specific exceptions for accounts services."""

from apps.core.exceptions import DomainError, ForbiddenError, NotFoundError


class AccountsServiceError(DomainError):
    """Base exception for accounts services."""
    pass


class UserNotFoundError(AccountsServiceError, NotFoundError):
    """Raised when user does not exist or is deactivated."""
    pass


class InsufficientRoleError(AccountsServiceError, ForbiddenError):
    """Raised when a user's role is below the one an operation requires."""
    pass
