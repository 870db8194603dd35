"""Domain-specific exceptions for the events app."""

from apps.core.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)


class EventServiceError(DomainError):
    """Base exception for all event service errors."""
    pass


class EventNotFoundError(EventServiceError, NotFoundError):
    """Raised when the event is missing or inactive."""
    pass


class ParticipantNotFoundError(EventServiceError, NotFoundError):
    pass


class EventNotRunningError(EventServiceError, InvalidStateError):
    pass


class InvalidEventScheduleError(EventServiceError, InvalidStateError):
    pass


class AlreadyParticipatedError(EventServiceError, ConflictError):
    pass


class EventPermissionError(EventServiceError, ForbiddenError):
    pass
