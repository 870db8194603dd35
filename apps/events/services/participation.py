"""
Event creation and participation.

Participating credits the event's XP bonus as an XPAudit row in the same
transaction, so a participation never exists without its bonus.
"""

import logging

from django.db import transaction
from django.utils import timezone

from apps.accounts.services import (
    InsufficientRoleError,
    UserNotFoundError,
    get_user,
    require_operator,
)
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.core.request_ids import ensure_request_id
from apps.events.models import Event, EventParticipation
from apps.xp.services import append_xp_audit, find_xp_audit

from .exceptions import (
    AlreadyParticipatedError,
    EventNotFoundError,
    EventNotRunningError,
    EventPermissionError,
    InvalidEventScheduleError,
    ParticipantNotFoundError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_event(*, created_by_id, title, starts_at, description='', ends_at=None,
                 xp_bonus=0, rarity_reward=None, request_id=None):
    """
    Create an event (operator only).

    Raises:
        EventPermissionError: If the creator is not an operator
        InvalidEventScheduleError: If ``ends_at`` is before ``starts_at``
    """
    request_id = ensure_request_id(request_id)

    try:
        creator = require_operator(user_id=created_by_id)
    except InsufficientRoleError:
        raise EventPermissionError("Only operators can create events")

    if ends_at is not None and ends_at < starts_at:
        raise InvalidEventScheduleError("Event cannot end before it starts")

    event = Event.objects.create(
        title=title,
        description=description,
        starts_at=starts_at,
        ends_at=ends_at,
        xp_bonus=xp_bonus or 0,
        rarity_reward=rarity_reward or None,
        created_by=creator,
    )

    log_event(
        LogLevel.INFO,
        'event_created',
        user_id=creator.id,
        request_id=request_id,
        metadata={'event_id': event.id, 'title': event.title},
    )
    return event


@transaction.atomic
def participate_in_event(*, event_id, user_id, request_id=None):
    """
    Register a user for a running event and credit its XP bonus.

    Retrying with the request id of the original participation returns that
    participation; any other second attempt is a conflict.

    Raises:
        EventNotFoundError: If the event is missing or inactive
        EventNotRunningError: If the event hasn't started or has ended
        ParticipantNotFoundError: If the user doesn't exist
        AlreadyParticipatedError: If the user already took part
    """
    request_id = ensure_request_id(request_id)

    try:
        event = Event.objects.select_for_update().get(id=event_id, is_active=True)
    except Event.DoesNotExist:
        raise EventNotFoundError("Event not found or inactive")

    if not event.is_running(timezone.now()):
        raise EventNotRunningError("Event is not currently active")

    try:
        user = get_user(user_id=user_id)
    except UserNotFoundError as e:
        raise ParticipantNotFoundError(str(e))

    existing = EventParticipation.objects.filter(event=event, user=user).first()
    if existing is not None:
        if existing.request_id == request_id:
            logger.info("Participation retry for event %s by %s", event.id, user.id)
            return existing
        raise AlreadyParticipatedError("User has already participated in this event")

    participation = EventParticipation.objects.create(
        event=event,
        user=user,
        request_id=request_id,
    )

    if event.xp_bonus > 0:
        reason = f"Event participation: {event.title}"
        if find_xp_audit(user_id=user.id, reason=reason, request_id=request_id) is None:
            append_xp_audit(
                user_id=user.id,
                amount=event.xp_bonus,
                reason=reason,
                request_id=request_id,
            )

    if event.rarity_reward:
        log_event(
            LogLevel.INFO,
            'event_rarity_reward_granted',
            user_id=user.id,
            request_id=request_id,
            metadata={'event_id': event.id, 'rarity_reward': event.rarity_reward},
        )

    log_event(
        LogLevel.INFO,
        'event_participation_success',
        user_id=user.id,
        request_id=request_id,
        metadata={
            'event_id': event.id,
            'xp_bonus': event.xp_bonus,
            'rarity_reward': event.rarity_reward,
        },
    )
    return participation


def get_events(*, include_inactive=False):
    queryset = Event.objects.all()
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    return list(
        queryset
        .select_related('created_by')
        .prefetch_related('participations__user')
        .order_by('-starts_at')
    )


def get_user_participations(*, user_id):
    return list(
        EventParticipation.objects
        .filter(user_id=user_id)
        .select_related('event')
        .order_by('-created_at')
    )
