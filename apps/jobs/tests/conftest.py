import pytest

from apps.jobs.models import AssignmentStatus, Job, JobAssignment


@pytest.fixture
def job(db, teacher, subject):
    """Open job for two students with rewards that do not split evenly."""
    return Job.objects.create(
        title='Clean the lab',
        description='Wipe the benches and sort the glassware.',
        subject=subject,
        teacher=teacher,
        xp_reward=101,
        money_reward=51,
        max_students=2,
    )


@pytest.fixture
def solo_job(db, teacher, subject):
    return Job.objects.create(
        title='Water the plants',
        description='Every morning for a week.',
        subject=subject,
        teacher=teacher,
        xp_reward=100,
        money_reward=50,
    )


@pytest.fixture
def applied_assignment(job, student):
    return JobAssignment.objects.create(job=job, student=student)


@pytest.fixture
def approved_pair(job, student, other_student):
    """Both seats of ``job`` taken by approved students."""
    return [
        JobAssignment.objects.create(job=job, student=s, status=AssignmentStatus.APPROVED)
        for s in (student, other_student)
    ]
