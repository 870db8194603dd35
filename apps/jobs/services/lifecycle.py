"""
Job creation, applications and review transitions.

Assignment state machine::

    APPLIED --approve--> APPROVED --close--> COMPLETED
    APPLIED --reject---> REJECTED
    APPROVED --return--> APPLIED

Applying locks the job row so capacity checks are serialized; review
transitions lock the assignment row.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.models import UserRole
from apps.accounts.services import (
    InsufficientRoleError,
    get_user_with_role,
    require_staff,
)
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.core.request_ids import ensure_request_id
from apps.jobs.models import AssignmentStatus, Job, JobAssignment, JobStatus
from apps.roster.services import get_subject

from .exceptions import (
    AlreadyAppliedError,
    AssignmentNotFoundError,
    InvalidAssignmentStateError,
    JobCreationNotAllowedError,
    JobFullError,
    JobNotFoundError,
    JobNotOpenError,
    NotJobCreatorError,
    StudentNotFoundError,
)

logger = logging.getLogger(__name__)


def get_job(*, job_id, lock=False):
    queryset = Job.objects.select_related('subject', 'teacher')
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=job_id)
    except Job.DoesNotExist:
        raise JobNotFoundError(f"Job with ID {job_id} not found")


@transaction.atomic
def create_job(
    *,
    title: str,
    description: str,
    subject_id: UUID,
    teacher_id: UUID,
    xp_reward: int,
    money_reward: int,
    max_students: int = 1,
    request_id: str = None,
) -> Job:
    """
    Post a new job in OPEN status.

    Raises:
        JobCreationNotAllowedError: If the creator is not a teacher/operator
        SubjectNotFoundError: If the subject doesn't exist
    """
    request_id = ensure_request_id(request_id)

    try:
        teacher = require_staff(user_id=teacher_id)
    except InsufficientRoleError:
        raise JobCreationNotAllowedError("Teacher not found or insufficient permissions")

    subject = get_subject(subject_id=subject_id)

    job = Job.objects.create(
        title=title,
        description=description,
        subject=subject,
        teacher=teacher,
        xp_reward=xp_reward,
        money_reward=money_reward,
        max_students=max_students or 1,
        status=JobStatus.OPEN,
    )

    log_event(
        LogLevel.INFO,
        f"Job created: {title}",
        user_id=teacher.id,
        request_id=request_id,
        metadata={
            'job_id': job.id,
            'subject_id': subject.id,
            'xp_reward': xp_reward,
            'money_reward': money_reward,
        },
    )
    return job


@transaction.atomic
def apply_for_job(*, job_id: UUID, student_id: UUID, request_id: str = None) -> JobAssignment:
    """
    Apply a student for an open job.

    The duplicate check runs before the capacity check, so a student who
    re-applies to a full job still gets "already applied".

    Raises:
        JobNotFoundError: If the job doesn't exist
        JobNotOpenError: If the job is not OPEN
        StudentNotFoundError: If the applicant is not an active student
        AlreadyAppliedError: If the student already has an assignment
        JobFullError: If the job has max_students assignments
    """
    request_id = ensure_request_id(request_id)

    job = get_job(job_id=job_id, lock=True)
    if job.status != JobStatus.OPEN:
        raise JobNotOpenError("Job is not open for applications")

    try:
        student = get_user_with_role(user_id=student_id, roles=[UserRole.STUDENT])
    except InsufficientRoleError:
        raise StudentNotFoundError(f"Student with ID {student_id} not found")

    assignments = list(job.assignments.all())
    if any(a.student_id == student.id for a in assignments):
        raise AlreadyAppliedError("Student already applied for this job")

    if len(assignments) >= job.max_students:
        raise JobFullError("Job is full")

    assignment = JobAssignment.objects.create(
        job=job,
        student=student,
        status=AssignmentStatus.APPLIED,
    )

    log_event(
        LogLevel.INFO,
        f"Student applied for job: {job.title}",
        user_id=student.id,
        request_id=request_id,
        metadata={'job_id': job.id, 'assignment_id': assignment.id},
    )
    return assignment


def _transition_assignment(*, assignment_id, teacher_id, source, target, action, request_id, job_id=None):
    request_id = ensure_request_id(request_id)

    try:
        assignment = (
            JobAssignment.objects
            .select_for_update()
            .select_related('job', 'student')
            .get(id=assignment_id)
        )
    except JobAssignment.DoesNotExist:
        raise AssignmentNotFoundError(f"Assignment with ID {assignment_id} not found")

    if job_id is not None and str(assignment.job_id) != str(job_id):
        raise AssignmentNotFoundError(f"Assignment with ID {assignment_id} not found")

    job = assignment.job
    if str(job.teacher_id) != str(teacher_id):
        raise NotJobCreatorError(f"Only the job creator can {action} assignments")

    if job.status == JobStatus.CLOSED:
        raise JobNotOpenError("Job is already closed")

    if assignment.status != source:
        raise InvalidAssignmentStateError(
            f"Assignment is not in {source} status",
            status=assignment.status,
        )

    assignment.status = target
    assignment.save(update_fields=['status', 'updated_at'])

    log_event(
        LogLevel.INFO,
        f"Job assignment {action} ({source} -> {target}): {job.title}",
        user_id=teacher_id,
        request_id=request_id,
        metadata={
            'job_id': job.id,
            'assignment_id': assignment.id,
            'student_id': assignment.student_id,
        },
    )
    logger.info("Assignment %s %s -> %s", assignment.id, source, target)
    return assignment


@transaction.atomic
def approve_job_assignment(*, assignment_id, teacher_id, request_id=None, job_id=None):
    """APPLIED -> APPROVED. Only approved students are paid at close."""
    return _transition_assignment(
        assignment_id=assignment_id,
        teacher_id=teacher_id,
        source=AssignmentStatus.APPLIED,
        target=AssignmentStatus.APPROVED,
        action='approve',
        request_id=request_id,
        job_id=job_id,
    )


@transaction.atomic
def reject_job_assignment(*, assignment_id, teacher_id, request_id=None, job_id=None):
    return _transition_assignment(
        assignment_id=assignment_id,
        teacher_id=teacher_id,
        source=AssignmentStatus.APPLIED,
        target=AssignmentStatus.REJECTED,
        action='reject',
        request_id=request_id,
        job_id=job_id,
    )


@transaction.atomic
def return_job_assignment(*, assignment_id, teacher_id, request_id=None, job_id=None):
    """APPROVED -> APPLIED, sending the work back for revision."""
    return _transition_assignment(
        assignment_id=assignment_id,
        teacher_id=teacher_id,
        source=AssignmentStatus.APPROVED,
        target=AssignmentStatus.APPLIED,
        action='return',
        request_id=request_id,
        job_id=job_id,
    )
