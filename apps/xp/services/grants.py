"""
XP grant engine.

Teachers grant XP within a per-subject daily budget; operators are not
budgeted. Grants are idempotent by (student, reason, request_id).
"""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import UserRole
from apps.accounts.services import InsufficientRoleError, UserNotFoundError, get_user, get_user_with_role
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.core.request_ids import ensure_request_id
from apps.roster.services import get_subject
from apps.xp.models import TeacherDailyBudget, XPAudit

from .exceptions import (
    DailyBudgetExceededError,
    GranterNotAllowedError,
    InvalidGrantAmountError,
    StudentNotFoundError,
)
from .ledger import append_xp_audit, find_xp_audit

logger = logging.getLogger(__name__)


def _debit_daily_budget(*, teacher, subject, amount):
    """
    Lock (or lazily create) today's budget row and charge ``amount`` to it.

    Raises:
        DailyBudgetExceededError: If ``used + amount`` would exceed the budget
    """
    budget, created = (
        TeacherDailyBudget.objects
        .select_for_update()
        .get_or_create(teacher=teacher, subject=subject, date=timezone.localdate())
    )
    if created:
        logger.debug("Created daily budget for %s / %s", teacher.id, subject.code)

    if budget.used + amount > budget.budget:
        logger.warning(
            "Budget exceeded: teacher=%s subject=%s used=%s budget=%s requested=%s",
            teacher.id, subject.code, budget.used, budget.budget, amount,
        )
        raise DailyBudgetExceededError(
            f"Daily XP budget exceeded. Available: {budget.remaining}, requested: {amount}",
            remaining=budget.remaining,
        )

    budget.used += amount
    budget.save(update_fields=['used', 'updated_at'])
    return budget


@transaction.atomic
def grant_xp(
    *,
    student_id: UUID,
    teacher_id: UUID,
    subject_id: UUID,
    amount: int,
    reason: str,
    request_id: str = None
) -> XPAudit:
    """
    Grant XP to a student.

    The student row is locked first so a retried request waits for the
    original and then finds its grant instead of racing it. The idempotency
    lookup happens before the budget check, so a retry never double-debits
    and never fails on a budget it already paid for.

    Args:
        student_id: UUID of the receiving student
        teacher_id: UUID of the granting teacher or operator
        subject_id: UUID of the subject the budget is charged to
        amount: Positive XP amount
        reason: Free-text reason, part of the idempotency key
        request_id: Idempotency key; generated when omitted

    Returns:
        The new XPAudit, or the existing one for a repeated request

    Raises:
        GranterNotAllowedError: If the granter is not a teacher or operator
        StudentNotFoundError: If the student doesn't exist
        SubjectNotFoundError: If the subject doesn't exist
        DailyBudgetExceededError: If a teacher's budget for today is exhausted
    """
    request_id = ensure_request_id(request_id)

    if amount <= 0:
        raise InvalidGrantAmountError("XP amount must be positive")

    try:
        granter = get_user_with_role(
            user_id=teacher_id,
            roles=[UserRole.TEACHER, UserRole.OPERATOR],
        )
    except InsufficientRoleError:
        raise GranterNotAllowedError("Teacher not found or insufficient permissions")

    try:
        student = get_user(user_id=student_id, lock=True, label='Student')
    except UserNotFoundError as e:
        raise StudentNotFoundError(str(e))

    subject = get_subject(subject_id=subject_id)

    existing = find_xp_audit(user_id=student.id, reason=reason, request_id=request_id)
    if existing is not None:
        logger.info("Repeated XP grant request %s for student %s", request_id, student.id)
        return existing

    budget = None
    if granter.role == UserRole.TEACHER:
        budget = _debit_daily_budget(teacher=granter, subject=subject, amount=amount)

    audit = append_xp_audit(
        user_id=student.id,
        amount=amount,
        reason=reason,
        request_id=request_id,
    )

    log_event(
        LogLevel.INFO,
        f"XP granted: {amount} XP to student for {reason}",
        user_id=granter.id,
        request_id=request_id,
        metadata={
            'student_id': student.id,
            'subject_id': subject.id,
            'amount': amount,
            'reason': reason,
            'budget_remaining': budget.remaining if budget else None,
        },
    )
    return audit
