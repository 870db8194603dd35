"""Read-side XP queries: per-student totals and the leaderboard."""

from django.conf import settings
from django.db.models import Sum
from django.db.models.functions import Coalesce

from apps.accounts.models import User, UserRole
from apps.accounts.services import UserNotFoundError, get_user
from apps.xp import leveling
from apps.xp.models import XPAudit

from .exceptions import StudentNotFoundError


def get_student_xp(*, student_id):
    """
    Total XP, level and grant history for one student.

    Returns:
        Dict with ``total_xp``, ``level``, ``progress_to_next_level``,
        ``xp_for_next_level``, ``xp_needed_for_next_level``, ``audits``
        (newest first) and ``recent_grants`` (the newest few)
    """
    try:
        student = get_user(user_id=student_id, label='Student')
    except UserNotFoundError as e:
        raise StudentNotFoundError(str(e))

    audits = list(XPAudit.objects.filter(user=student).order_by('-created_at'))
    total_xp = sum(audit.amount for audit in audits)
    info = leveling.level_info(total_xp)

    return {
        'student': student,
        'total_xp': total_xp,
        'level': info.level,
        'progress_to_next_level': leveling.progress_to_next_level(total_xp),
        'xp_for_next_level': info.xp_for_next_level,
        'xp_needed_for_next_level': info.xp_required,
        'audits': audits,
        'recent_grants': audits[:settings.EDURPG_RECENT_GRANTS_LIMIT],
    }


def get_xp_leaderboard(*, class_id=None, limit=10):
    """Students ranked by total XP, optionally within one class."""
    queryset = User.objects.filter(role=UserRole.STUDENT, is_active=True)
    if class_id:
        queryset = queryset.filter(school_class_id=class_id)

    rows = (
        queryset
        .annotate(total_xp=Coalesce(Sum('xp_audits__amount'), 0))
        .filter(total_xp__gt=0)
        .order_by('-total_xp', 'display_name')[:limit]
    )

    return [
        {
            'rank': position,
            'user_id': user.id,
            'name': user.get_display_name(),
            'total_xp': user.total_xp,
            'level': leveling.level_from_xp(user.total_xp),
        }
        for position, user in enumerate(rows, start=1)
    ]
