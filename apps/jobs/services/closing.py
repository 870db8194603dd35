"""
Closing a job and paying out its rewards.

Rewards are split evenly between the APPROVED assignments with integer
floor division. The leftover (``reward % n``, or the whole reward when
nobody was approved) is not paid to anyone; it is only recorded in a WARN
audit entry.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.core.request_ids import ensure_request_id
from apps.jobs.models import AssignmentStatus, JobStatus
from apps.shop.models import MoneyTxType
from apps.shop.services import append_money_tx
from apps.xp.services import append_xp_audit

from .exceptions import JobNotOpenError, NotJobCreatorError
from .lifecycle import get_job

logger = logging.getLogger(__name__)

CLOSABLE_STATUSES = (JobStatus.OPEN, JobStatus.IN_PROGRESS)


def split_reward(total, count):
    """
    Split an integer reward into identical shares.

    Args:
        total (int): Reward to split.
        count (int): Number of recipients.

    Returns:
        tuple: ``(share, remainder)`` where ``share * count + remainder == total``.
        With no recipients the share is 0 and the whole total is remainder.

    Example:
        101 XP between 2 students::

            >>> split_reward(101, 2)
            (50, 1)
    """
    if count <= 0:
        return 0, total
    share = total // count
    return share, total - share * count


@transaction.atomic
def close_job(*, job_id: UUID, teacher_id: UUID, request_id: str = None) -> dict:
    """
    Close a job and pay every approved student.

    Each approved student gets an XPAudit and an EARNED MoneyTx for their
    share and moves to COMPLETED. APPLIED and REJECTED assignments are left
    as they are. Everything happens in one transaction: if any write fails,
    the job stays open and nobody is paid.

    Args:
        job_id: UUID of the job
        teacher_id: UUID of the caller, must be the job's teacher
        request_id: Optional idempotency key stamped on every ledger row

    Returns:
        Dict with ``job``, ``payouts`` (one dict per paid student with
        ``student_id``, ``name``, ``xp_amount``, ``money_amount``) and
        ``remainder`` (``{'xp': int, 'money': int}``)

    Raises:
        JobNotFoundError: If the job doesn't exist
        NotJobCreatorError: If the caller is not the job's teacher
        JobNotOpenError: If the job is already closed
    """
    request_id = ensure_request_id(request_id)

    job = get_job(job_id=job_id, lock=True)

    if str(job.teacher_id) != str(teacher_id):
        raise NotJobCreatorError("Only the job creator can close the job")

    if job.status not in CLOSABLE_STATUSES:
        raise JobNotOpenError("Job cannot be closed in its current status")

    now = timezone.now()
    job.status = JobStatus.CLOSED
    job.closed_at = now
    job.save(update_fields=['status', 'closed_at', 'updated_at'])

    approved = list(
        job.assignments
        .select_for_update()
        .select_related('student')
        .filter(status=AssignmentStatus.APPROVED)
        .order_by('created_at')
    )

    xp_share, xp_remainder = split_reward(job.xp_reward, len(approved))
    money_share, money_remainder = split_reward(job.money_reward, len(approved))
    reason = f"Job completion: {job.title}"

    payouts = []
    for assignment in approved:
        student = assignment.student

        # One row of each kind per student, zero shares included
        append_xp_audit(
            user_id=student.id,
            amount=xp_share,
            reason=reason,
            request_id=request_id,
        )
        append_money_tx(
            user_id=student.id,
            amount=money_share,
            tx_type=MoneyTxType.EARNED,
            reason=reason,
            request_id=request_id,
        )

        assignment.status = AssignmentStatus.COMPLETED
        assignment.completed_at = now
        assignment.save(update_fields=['status', 'completed_at', 'updated_at'])

        payouts.append({
            'student_id': student.id,
            'name': student.get_display_name(),
            'xp_amount': xp_share,
            'money_amount': money_share,
        })

    remainder = {'xp': xp_remainder, 'money': money_remainder}

    log_event(
        LogLevel.INFO,
        f"Job closed: {job.title}",
        user_id=teacher_id,
        request_id=request_id,
        metadata={
            'job_id': job.id,
            'total_xp': job.xp_reward,
            'total_money': job.money_reward,
            'students_count': len(approved),
        },
    )

    if xp_remainder or money_remainder:
        log_event(
            LogLevel.WARN,
            f"Job reward remainder not distributed: {job.title}",
            user_id=teacher_id,
            request_id=request_id,
            metadata={
                'job_id': job.id,
                'xp_remainder': xp_remainder,
                'money_remainder': money_remainder,
                'students_count': len(approved),
            },
        )

    logger.info(
        "Closed job %s: %s students paid %s XP / %s money each",
        job.id, len(approved), xp_share, money_share,
    )
    return {'job': job, 'payouts': payouts, 'remainder': remainder}
