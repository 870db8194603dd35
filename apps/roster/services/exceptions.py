"""Domain-specific exceptions for roster services."""

from apps.core.exceptions import DomainError, NotFoundError


class RosterServiceError(DomainError):
    """Base exception for roster services."""
    pass


class ExternalRefNotFoundError(RosterServiceError, NotFoundError):
    """Raised when no internal row is mapped to an external identifier."""
    pass


class SubjectNotFoundError(RosterServiceError, NotFoundError):
    pass
