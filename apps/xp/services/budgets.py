"""Teacher daily budget reads and operator overrides."""

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import UserRole
from apps.accounts.services import InsufficientRoleError, get_user_with_role, require_operator
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.roster.services import get_subject
from apps.xp.models import TeacherDailyBudget

from .exceptions import GranterNotAllowedError, InvalidGrantAmountError, TeacherNotFoundError


def _budget_dict(*, subject, budget, used, date):
    return {
        'subject': {'id': subject.id, 'name': subject.name, 'code': subject.code},
        'date': date,
        'budget': budget,
        'used': used,
        'remaining': max(0, budget - used),
    }


def get_teacher_daily_budget(*, teacher_id, subject_id, date=None):
    """
    Budget state for one subject on one day.

    A day without grants has no row yet; the default budget is reported
    without creating one.
    """
    date = date or timezone.localdate()
    subject = get_subject(subject_id=subject_id)
    row = TeacherDailyBudget.objects.filter(
        teacher_id=teacher_id, subject=subject, date=date
    ).first()

    if row is None:
        default = settings.EDURPG_DEFAULT_DAILY_XP_BUDGET
        return _budget_dict(subject=subject, budget=default, used=0, date=date)
    return _budget_dict(subject=subject, budget=row.budget, used=row.used, date=date)


def get_teacher_daily_budgets(*, teacher_id, date=None):
    """All budget rows a teacher has for a day, with a summary."""
    date = date or timezone.localdate()
    rows = (
        TeacherDailyBudget.objects
        .filter(teacher_id=teacher_id, date=date)
        .select_related('subject')
        .order_by('subject__name')
    )
    budgets = [
        _budget_dict(subject=row.subject, budget=row.budget, used=row.used, date=date)
        for row in rows
    ]
    return {
        'date': date,
        'budgets': budgets,
        'summary': {
            'total_budget': sum(b['budget'] for b in budgets),
            'total_used': sum(b['used'] for b in budgets),
            'total_remaining': sum(b['remaining'] for b in budgets),
        },
    }


@transaction.atomic
def set_daily_budget(*, operator_id, teacher_id, subject_id, budget, date=None):
    """
    Override a teacher's budget for a day (operator only).

    Lowering the budget below what was already used is allowed; further
    grants that day are then rejected.
    """
    try:
        operator = require_operator(user_id=operator_id)
    except InsufficientRoleError:
        raise GranterNotAllowedError("Only operators can change daily budgets")

    if budget < 0:
        raise InvalidGrantAmountError("Budget cannot be negative")

    try:
        get_user_with_role(user_id=teacher_id, roles=[UserRole.TEACHER])
    except InsufficientRoleError:
        raise TeacherNotFoundError(f"Teacher with ID {teacher_id} not found")

    date = date or timezone.localdate()
    subject = get_subject(subject_id=subject_id)

    row, created = (
        TeacherDailyBudget.objects
        .select_for_update()
        .get_or_create(
            teacher_id=teacher_id,
            subject=subject,
            date=date,
            defaults={'budget': budget},
        )
    )
    if not created:
        row.budget = budget
        row.save(update_fields=['budget', 'updated_at'])

    log_event(
        LogLevel.INFO,
        'daily_budget_set',
        user_id=operator.id,
        metadata={
            'teacher_id': teacher_id,
            'subject_id': subject.id,
            'date': date,
            'budget': budget,
        },
    )
    return row
