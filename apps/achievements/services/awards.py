"""Achievement catalog and awarding."""

from django.db import IntegrityError, transaction
from django.db.models import Count

from apps.accounts.services import (
    InsufficientRoleError,
    UserNotFoundError,
    get_user,
    require_operator,
)
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.core.request_ids import ensure_request_id
from apps.achievements.models import Achievement, AchievementAward

from .exceptions import (
    AchievementExistsError,
    AchievementNotFoundError,
    AchievementPermissionError,
    AlreadyAwardedError,
    RecipientNotFoundError,
)


def _require_operator(user_id, action):
    try:
        return require_operator(user_id=user_id)
    except InsufficientRoleError:
        raise AchievementPermissionError(f"Only operators can {action} achievements")


@transaction.atomic
def create_achievement(*, operator_id, name, description, badge_url='', criteria='', request_id=None):
    operator = _require_operator(operator_id, 'create')

    if Achievement.objects.filter(name=name).exists():
        raise AchievementExistsError(f"Achievement '{name}' already exists")

    achievement = Achievement.objects.create(
        name=name,
        description=description,
        badge_url=badge_url,
        criteria=criteria,
        is_active=True,
    )

    log_event(
        LogLevel.INFO,
        'achievement_created',
        user_id=operator.id,
        request_id=request_id,
        metadata={'achievement_id': achievement.id, 'achievement_name': achievement.name},
    )
    return achievement


@transaction.atomic
def award_achievement(*, achievement_id, user_id, awarded_by_id, request_id=None):
    """
    Give an achievement to a user (operator only).

    Raises:
        AchievementPermissionError: If the awarder is not an operator
        AchievementNotFoundError: If the achievement is missing or inactive
        RecipientNotFoundError: If the user doesn't exist
        AlreadyAwardedError: If the user already holds the achievement
    """
    request_id = ensure_request_id(request_id)
    operator = _require_operator(awarded_by_id, 'award')

    try:
        achievement = Achievement.objects.get(id=achievement_id, is_active=True)
    except Achievement.DoesNotExist:
        raise AchievementNotFoundError("Achievement not found or not active")

    try:
        user = get_user(user_id=user_id, lock=True)
    except UserNotFoundError as e:
        raise RecipientNotFoundError(str(e))

    if AchievementAward.objects.filter(user=user, achievement=achievement).exists():
        raise AlreadyAwardedError("Achievement already awarded to this user")

    try:
        with transaction.atomic():
            award = AchievementAward.objects.create(
                user=user,
                achievement=achievement,
                awarded_by=operator,
                request_id=request_id,
            )
    except IntegrityError:
        raise AlreadyAwardedError("Achievement already awarded to this user")

    log_event(
        LogLevel.INFO,
        'achievement_awarded',
        user_id=user.id,
        request_id=request_id,
        metadata={
            'achievement_id': achievement.id,
            'achievement_name': achievement.name,
            'awarded_by': operator.id,
        },
    )
    return award


def get_achievements(*, include_inactive=True):
    """Achievements with ``awards_count``, active ones first."""
    queryset = Achievement.objects.annotate(awards_count=Count('awards'))
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    return list(queryset.order_by('-is_active', 'name'))


def get_user_achievements(*, user_id):
    return list(
        AchievementAward.objects
        .filter(user_id=user_id)
        .select_related('achievement', 'awarded_by')
        .order_by('-created_at')
    )
