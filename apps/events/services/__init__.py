"""Services for school events and participation bonuses."""

from .exceptions import (
    EventServiceError,
    EventNotFoundError,
    ParticipantNotFoundError,
    EventNotRunningError,
    InvalidEventScheduleError,
    AlreadyParticipatedError,
    EventPermissionError,
)
from .participation import (
    create_event,
    get_events,
    get_user_participations,
    participate_in_event,
)

__all__ = [
    # Exceptions
    'EventServiceError',
    'EventNotFoundError',
    'ParticipantNotFoundError',
    'EventNotRunningError',
    'InvalidEventScheduleError',
    'AlreadyParticipatedError',
    'EventPermissionError',
    # Services
    'create_event',
    'participate_in_event',
    'get_events',
    'get_user_participations',
]
