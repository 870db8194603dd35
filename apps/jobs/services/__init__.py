"""Services for the jobs lifecycle: posting, applications, reviews and payouts."""

from .exceptions import (
    JobServiceError,
    JobNotFoundError,
    AssignmentNotFoundError,
    StudentNotFoundError,
    NotJobCreatorError,
    JobCreationNotAllowedError,
    JobNotOpenError,
    JobFullError,
    InvalidAssignmentStateError,
    AlreadyAppliedError,
)
from .lifecycle import (
    apply_for_job,
    approve_job_assignment,
    create_job,
    get_job,
    reject_job_assignment,
    return_job_assignment,
)
from .closing import close_job, split_reward
from .queries import get_job_stats, get_jobs_for_student, get_jobs_for_teacher

__all__ = [
    # Exceptions
    'JobServiceError',
    'JobNotFoundError',
    'AssignmentNotFoundError',
    'StudentNotFoundError',
    'NotJobCreatorError',
    'JobCreationNotAllowedError',
    'JobNotOpenError',
    'JobFullError',
    'InvalidAssignmentStateError',
    'AlreadyAppliedError',
    # Services
    'create_job',
    'get_job',
    'apply_for_job',
    'approve_job_assignment',
    'reject_job_assignment',
    'return_job_assignment',
    'close_job',
    'split_reward',
    'get_jobs_for_student',
    'get_jobs_for_teacher',
    'get_job_stats',
]
