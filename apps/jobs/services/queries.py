"""Read-side job listings and teacher statistics."""

from django.db.models import Count, Prefetch, Q

from apps.jobs.models import AssignmentStatus, Job, JobAssignment, JobStatus
from apps.roster.services import get_enrolled_subject_ids


def get_jobs_for_student(*, student_id, class_id=None):
    """
    Open jobs in subjects the student is enrolled in.

    Each job carries ``my_assignments`` holding the student's own
    application, if any.
    """
    subject_ids = get_enrolled_subject_ids(user_id=student_id, class_id=class_id)
    return list(
        Job.objects
        .filter(status=JobStatus.OPEN, subject_id__in=subject_ids)
        .select_related('subject', 'teacher')
        .prefetch_related(
            Prefetch(
                'assignments',
                queryset=JobAssignment.objects.filter(student_id=student_id),
                to_attr='my_assignments',
            )
        )
        .order_by('-created_at')
    )


def get_jobs_for_teacher(*, teacher_id, status=None):
    queryset = Job.objects.filter(teacher_id=teacher_id)
    if status:
        queryset = queryset.filter(status=status)
    return list(
        queryset
        .select_related('subject')
        .prefetch_related('assignments__student')
        .order_by('-created_at')
    )


def get_job_stats(*, teacher_id):
    jobs = Job.objects.filter(teacher_id=teacher_id).aggregate(
        total_jobs=Count('id'),
        open_jobs=Count('id', filter=Q(status=JobStatus.OPEN)),
        closed_jobs=Count('id', filter=Q(status=JobStatus.CLOSED)),
    )
    assignments = JobAssignment.objects.filter(job__teacher_id=teacher_id).aggregate(
        total_applications=Count('id'),
        pending_applications=Count('id', filter=Q(status=AssignmentStatus.APPLIED)),
        completed_assignments=Count('id', filter=Q(status=AssignmentStatus.COMPLETED)),
    )
    return {**jobs, **assignments}
