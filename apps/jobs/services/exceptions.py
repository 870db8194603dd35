"""Domain-specific exceptions for the jobs app."""

from apps.core.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)


class JobServiceError(DomainError):
    """Base exception for all job service errors."""
    pass


class JobNotFoundError(JobServiceError, NotFoundError):
    pass


class AssignmentNotFoundError(JobServiceError, NotFoundError):
    pass


class StudentNotFoundError(JobServiceError, NotFoundError):
    pass


class NotJobCreatorError(JobServiceError, ForbiddenError):
    """Raised when someone other than the job's teacher reviews or closes it."""
    pass


class JobCreationNotAllowedError(JobServiceError, ForbiddenError):
    pass


class JobNotOpenError(JobServiceError, InvalidStateError):
    pass


class JobFullError(JobServiceError, InvalidStateError):
    pass


class InvalidAssignmentStateError(JobServiceError, InvalidStateError):
    """Raised when a review transition does not start from the expected status."""
    pass


class AlreadyAppliedError(JobServiceError, ConflictError):
    pass
