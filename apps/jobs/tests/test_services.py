"""
Service layer tests for the jobs lifecycle.

Tests cover:
- Job creation permissions
- Applications: open check, duplicate before capacity, capacity
- Review transitions and creator-only authorization
- Close: floor-division payouts, remainder logging, atomic rollback
"""

import uuid
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from apps.audit.models import LogLevel, SystemLog
from apps.jobs.models import AssignmentStatus, Job, JobAssignment, JobStatus
from apps.jobs.services import (
    AlreadyAppliedError,
    AssignmentNotFoundError,
    InvalidAssignmentStateError,
    JobCreationNotAllowedError,
    JobFullError,
    JobNotFoundError,
    JobNotOpenError,
    NotJobCreatorError,
    StudentNotFoundError,
    apply_for_job,
    approve_job_assignment,
    close_job,
    create_job,
    get_job_stats,
    get_jobs_for_student,
    get_jobs_for_teacher,
    reject_job_assignment,
    return_job_assignment,
    split_reward,
)
from apps.roster.services import SubjectNotFoundError
from apps.shop.models import MoneyTx, MoneyTxType
from apps.shop.services import get_user_balance
from apps.xp.models import XPAudit
from apps.xp.services import get_total_xp


# =============================================================================
# Reward splitting
# =============================================================================

class TestSplitReward:

    @pytest.mark.parametrize('total, count, expected', [
        (101, 2, (50, 1)),
        (100, 1, (100, 0)),
        (10, 3, (3, 1)),
        (1, 2, (0, 1)),
        (0, 4, (0, 0)),
        (77, 0, (0, 77)),
    ])
    def test_split(self, total, count, expected):
        assert split_reward(total, count) == expected

    def test_shares_and_remainder_add_up(self):
        for total in range(0, 60):
            for count in range(1, 8):
                share, remainder = split_reward(total, count)
                assert share * count + remainder == total
                assert 0 <= remainder < count


# =============================================================================
# Creating jobs
# =============================================================================

@pytest.mark.django_db
class TestCreateJob:

    def _create(self, teacher_id, subject_id, **overrides):
        data = {
            'title': 'Tidy the library',
            'description': 'Shelve returned books.',
            'subject_id': subject_id,
            'teacher_id': teacher_id,
            'xp_reward': 40,
            'money_reward': 10,
        }
        data.update(overrides)
        return create_job(**data)

    def test_teacher_creates_open_job(self, teacher, subject):
        job = self._create(teacher.id, subject.id, request_id='create-1')

        assert job.status == JobStatus.OPEN
        assert job.max_students == 1
        entry = SystemLog.objects.get(request_id='create-1')
        assert entry.message == 'Job created: Tidy the library'
        assert entry.user == teacher

    def test_operator_can_create(self, operator, subject):
        job = self._create(operator.id, subject.id, max_students=3)
        assert job.max_students == 3

    def test_student_cannot_create(self, student, subject):
        with pytest.raises(JobCreationNotAllowedError):
            self._create(student.id, subject.id)
        assert not Job.objects.exists()

    def test_unknown_subject(self, teacher):
        with pytest.raises(SubjectNotFoundError):
            self._create(teacher.id, uuid.uuid4())


# =============================================================================
# Applying
# =============================================================================

@pytest.mark.django_db
class TestApplyForJob:

    def test_apply(self, job, student):
        assignment = apply_for_job(job_id=job.id, student_id=student.id, request_id='apply-1')

        assert assignment.status == AssignmentStatus.APPLIED
        entry = SystemLog.objects.get(request_id='apply-1')
        assert entry.user == student
        assert entry.metadata['assignment_id'] == str(assignment.id)

    def test_missing_job(self, student):
        with pytest.raises(JobNotFoundError):
            apply_for_job(job_id=uuid.uuid4(), student_id=student.id)

    def test_closed_job(self, job, student):
        job.status = JobStatus.CLOSED
        job.save()

        with pytest.raises(JobNotOpenError):
            apply_for_job(job_id=job.id, student_id=student.id)

    def test_in_progress_job_takes_no_applications(self, job, student):
        job.status = JobStatus.IN_PROGRESS
        job.save()

        with pytest.raises(JobNotOpenError):
            apply_for_job(job_id=job.id, student_id=student.id)

    def test_capacity(self, solo_job, student, other_student):
        apply_for_job(job_id=solo_job.id, student_id=student.id)

        with pytest.raises(JobFullError):
            apply_for_job(job_id=solo_job.id, student_id=other_student.id)

        assert solo_job.assignments.count() == 1

    def test_duplicate_reported_before_capacity(self, solo_job, student):
        apply_for_job(job_id=solo_job.id, student_id=student.id)

        with pytest.raises(AlreadyAppliedError):
            apply_for_job(job_id=solo_job.id, student_id=student.id)

    def test_rejected_assignment_still_takes_a_seat(self, solo_job, student, other_student):
        JobAssignment.objects.create(job=solo_job, student=student, status=AssignmentStatus.REJECTED)

        with pytest.raises(JobFullError):
            apply_for_job(job_id=solo_job.id, student_id=other_student.id)

    def test_teacher_cannot_apply(self, job, other_teacher):
        with pytest.raises(StudentNotFoundError):
            apply_for_job(job_id=job.id, student_id=other_teacher.id)


# =============================================================================
# Reviewing
# =============================================================================

@pytest.mark.django_db
class TestReviewTransitions:

    def test_approve(self, teacher, applied_assignment):
        assignment = approve_job_assignment(
            assignment_id=applied_assignment.id, teacher_id=teacher.id
        )
        assert assignment.status == AssignmentStatus.APPROVED

    def test_reject(self, teacher, applied_assignment):
        assignment = reject_job_assignment(
            assignment_id=applied_assignment.id, teacher_id=teacher.id
        )
        assert assignment.status == AssignmentStatus.REJECTED

    def test_return_sends_approved_back(self, teacher, applied_assignment):
        approve_job_assignment(assignment_id=applied_assignment.id, teacher_id=teacher.id)

        assignment = return_job_assignment(
            assignment_id=applied_assignment.id, teacher_id=teacher.id
        )
        assert assignment.status == AssignmentStatus.APPLIED

    def test_return_requires_approved(self, teacher, applied_assignment):
        with pytest.raises(InvalidAssignmentStateError):
            return_job_assignment(assignment_id=applied_assignment.id, teacher_id=teacher.id)

    def test_cannot_approve_rejected(self, teacher, applied_assignment):
        reject_job_assignment(assignment_id=applied_assignment.id, teacher_id=teacher.id)

        with pytest.raises(InvalidAssignmentStateError):
            approve_job_assignment(assignment_id=applied_assignment.id, teacher_id=teacher.id)

    @pytest.mark.parametrize('transition', [
        approve_job_assignment,
        reject_job_assignment,
        return_job_assignment,
    ])
    def test_only_creator_may_review(self, transition, other_teacher, applied_assignment):
        with pytest.raises(NotJobCreatorError):
            transition(assignment_id=applied_assignment.id, teacher_id=other_teacher.id)

        applied_assignment.refresh_from_db()
        assert applied_assignment.status == AssignmentStatus.APPLIED

    def test_operator_is_not_the_creator(self, operator, applied_assignment):
        with pytest.raises(NotJobCreatorError):
            approve_job_assignment(assignment_id=applied_assignment.id, teacher_id=operator.id)

    def test_closed_job_cannot_be_reviewed(self, teacher, job, applied_assignment):
        job.status = JobStatus.CLOSED
        job.save()

        with pytest.raises(JobNotOpenError):
            approve_job_assignment(assignment_id=applied_assignment.id, teacher_id=teacher.id)

    def test_missing_assignment(self, teacher):
        with pytest.raises(AssignmentNotFoundError):
            approve_job_assignment(assignment_id=uuid.uuid4(), teacher_id=teacher.id)

    def test_assignment_of_another_job(self, teacher, solo_job, applied_assignment):
        with pytest.raises(AssignmentNotFoundError):
            approve_job_assignment(
                assignment_id=applied_assignment.id,
                teacher_id=teacher.id,
                job_id=solo_job.id,
            )


# =============================================================================
# Closing
# =============================================================================

@pytest.mark.django_db
class TestCloseJob:

    def test_uneven_split_between_two(self, teacher, job, approved_pair, student, other_student):
        result = close_job(job_id=job.id, teacher_id=teacher.id, request_id='close-1')

        assert result['job'].status == JobStatus.CLOSED
        assert result['job'].closed_at is not None
        assert [(p['xp_amount'], p['money_amount']) for p in result['payouts']] == [(50, 25), (50, 25)]
        assert result['remainder'] == {'xp': 1, 'money': 1}

        for s in (student, other_student):
            assert get_total_xp(user_id=s.id) == 50
            assert get_user_balance(user_id=s.id) == 25

        for assignment in approved_pair:
            assignment.refresh_from_db()
            assert assignment.status == AssignmentStatus.COMPLETED
            assert assignment.completed_at is not None

    def test_payout_rows_carry_reason_and_request_id(self, teacher, job, approved_pair):
        close_job(job_id=job.id, teacher_id=teacher.id, request_id='close-rows')

        audit = XPAudit.objects.filter(request_id='close-rows').first()
        assert audit.reason == 'Job completion: Clean the lab'
        tx = MoneyTx.objects.filter(request_id='close-rows').first()
        assert tx.type == MoneyTxType.EARNED
        assert tx.reason == 'Job completion: Clean the lab'

    def test_single_student_gets_everything(self, teacher, solo_job, student):
        JobAssignment.objects.create(job=solo_job, student=student, status=AssignmentStatus.APPROVED)

        result = close_job(job_id=solo_job.id, teacher_id=teacher.id)

        assert result['payouts'] == [{
            'student_id': student.id,
            'name': 'Jana Student',
            'xp_amount': 100,
            'money_amount': 50,
        }]
        assert result['remainder'] == {'xp': 0, 'money': 0}
        assert not SystemLog.objects.filter(level=LogLevel.WARN).exists()

    def test_nobody_approved(self, teacher, job, applied_assignment):
        result = close_job(job_id=job.id, teacher_id=teacher.id)

        assert result['payouts'] == []
        assert result['remainder'] == {'xp': 101, 'money': 51}
        assert not XPAudit.objects.exists()
        assert not MoneyTx.objects.exists()

        applied_assignment.refresh_from_db()
        assert applied_assignment.status == AssignmentStatus.APPLIED

    def test_only_approved_are_paid(self, teacher, job, student, other_student):
        JobAssignment.objects.create(job=job, student=student, status=AssignmentStatus.APPROVED)
        rejected = JobAssignment.objects.create(
            job=job, student=other_student, status=AssignmentStatus.REJECTED
        )

        result = close_job(job_id=job.id, teacher_id=teacher.id)

        assert [p['student_id'] for p in result['payouts']] == [student.id]
        assert result['payouts'][0]['xp_amount'] == 101
        rejected.refresh_from_db()
        assert rejected.status == AssignmentStatus.REJECTED
        assert get_total_xp(user_id=other_student.id) == 0

    def test_remainder_logged_as_warning(self, teacher, job, approved_pair):
        close_job(job_id=job.id, teacher_id=teacher.id, request_id='close-warn')

        warning = SystemLog.objects.get(request_id='close-warn', level=LogLevel.WARN)
        assert warning.metadata['xp_remainder'] == 1
        assert warning.metadata['money_remainder'] == 1

    def test_zero_shares_still_write_ledger_rows(self, teacher, subject, student, other_student):
        job = Job.objects.create(
            title='Tiny', description='x', subject=subject, teacher=teacher,
            xp_reward=1, money_reward=0, max_students=2,
        )
        for s in (student, other_student):
            JobAssignment.objects.create(job=job, student=s, status=AssignmentStatus.APPROVED)

        result = close_job(job_id=job.id, teacher_id=teacher.id)

        assert [p['xp_amount'] for p in result['payouts']] == [0, 0]
        assert result['remainder'] == {'xp': 1, 'money': 0}
        for s in (student, other_student):
            assert list(XPAudit.objects.filter(user=s).values_list('amount', flat=True)) == [0]
            tx = MoneyTx.objects.get(user=s)
            assert tx.amount == 0
            assert tx.type == MoneyTxType.EARNED
        assert job.assignments.filter(status=AssignmentStatus.COMPLETED).count() == 2

    def test_unpaid_job_records_completion_in_money_ledger(self, teacher, subject, student):
        job = Job.objects.create(
            title='Volunteer', description='x', subject=subject, teacher=teacher,
            xp_reward=100, money_reward=0, max_students=1,
        )
        JobAssignment.objects.create(job=job, student=student, status=AssignmentStatus.APPROVED)

        result = close_job(job_id=job.id, teacher_id=teacher.id)

        assert result['payouts'][0]['xp_amount'] == 100
        assert result['payouts'][0]['money_amount'] == 0
        tx = MoneyTx.objects.get(user=student)
        assert (tx.amount, tx.type, tx.reason) == (0, MoneyTxType.EARNED, 'Job completion: Volunteer')
        assert get_user_balance(user_id=student.id) == 0

    def test_in_progress_job_can_close(self, teacher, solo_job):
        solo_job.status = JobStatus.IN_PROGRESS
        solo_job.save()

        result = close_job(job_id=solo_job.id, teacher_id=teacher.id)
        assert result['job'].status == JobStatus.CLOSED

    def test_cannot_close_twice(self, teacher, job, approved_pair, student):
        close_job(job_id=job.id, teacher_id=teacher.id)

        with pytest.raises(JobNotOpenError):
            close_job(job_id=job.id, teacher_id=teacher.id)

        assert get_total_xp(user_id=student.id) == 50

    @pytest.mark.parametrize('status', [JobStatus.OPEN, JobStatus.CLOSED])
    def test_only_creator_may_close(self, status, other_teacher, job):
        job.status = status
        job.save()

        with pytest.raises(NotJobCreatorError):
            close_job(job_id=job.id, teacher_id=other_teacher.id)

    def test_missing_job(self, teacher):
        with pytest.raises(JobNotFoundError):
            close_job(job_id=uuid.uuid4(), teacher_id=teacher.id)

    def test_failed_payout_rolls_everything_back(
        self, teacher, subject, student, other_student, third_student
    ):
        job = Job.objects.create(
            title='Group project', description='x', subject=subject, teacher=teacher,
            xp_reward=90, money_reward=30, max_students=3,
        )
        for s in (student, other_student, third_student):
            JobAssignment.objects.create(job=job, student=s, status=AssignmentStatus.APPROVED)

        real_create = XPAudit.objects.create
        calls = []

        def fail_on_second_insert(**kwargs):
            calls.append(kwargs)
            if len(calls) == 2:
                raise DatabaseError("disk full")
            return real_create(**kwargs)

        with patch.object(XPAudit.objects, 'create', side_effect=fail_on_second_insert):
            with pytest.raises(DatabaseError):
                close_job(job_id=job.id, teacher_id=teacher.id)

        job.refresh_from_db()
        assert job.status == JobStatus.OPEN
        assert job.closed_at is None
        assert not XPAudit.objects.exists()
        assert not MoneyTx.objects.exists()
        assert job.assignments.filter(status=AssignmentStatus.APPROVED).count() == 3
        assert not SystemLog.objects.filter(message__startswith='Job closed').exists()


# =============================================================================
# Queries
# =============================================================================

@pytest.mark.django_db
class TestJobQueries:

    def test_student_sees_open_jobs_in_enrolled_subjects(self, enrolled_student, job, solo_job):
        solo_job.status = JobStatus.CLOSED
        solo_job.save()
        JobAssignment.objects.create(job=job, student=enrolled_student)

        jobs = get_jobs_for_student(student_id=enrolled_student.id)

        assert jobs == [job]
        assert jobs[0].my_assignments[0].student_id == enrolled_student.id

    def test_student_without_enrollment_sees_nothing(self, other_student, job):
        assert get_jobs_for_student(student_id=other_student.id) == []

    def test_teacher_jobs_filtered_by_status(self, teacher, other_teacher, job, solo_job):
        solo_job.status = JobStatus.CLOSED
        solo_job.save()

        assert set(get_jobs_for_teacher(teacher_id=teacher.id)) == {job, solo_job}
        assert get_jobs_for_teacher(teacher_id=teacher.id, status=JobStatus.OPEN) == [job]
        assert get_jobs_for_teacher(teacher_id=other_teacher.id) == []

    def test_job_stats(self, teacher, job, solo_job, applied_assignment, other_student):
        JobAssignment.objects.create(job=solo_job, student=other_student, status=AssignmentStatus.APPROVED)
        close_job(job_id=solo_job.id, teacher_id=teacher.id)

        assert get_job_stats(teacher_id=teacher.id) == {
            'total_jobs': 2,
            'open_jobs': 1,
            'closed_jobs': 1,
            'total_applications': 2,
            'pending_applications': 1,
            'completed_assignments': 1,
        }
