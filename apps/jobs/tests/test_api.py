import pytest
from django.urls import reverse
from rest_framework import status

from apps.conftest import authenticate
from apps.jobs.models import AssignmentStatus, Job, JobAssignment, JobStatus


@pytest.mark.django_db
class TestJobsEndpoint:
    """Tests for GET/POST /api/jobs/"""

    def test_teacher_creates_job(self, teacher_client, subject):
        data = {
            'title': '  Sort the archive ',
            'description': 'Alphabetize old tests.',
            'subject_id': str(subject.id),
            'xp_reward': 30,
            'money_reward': 5,
            'max_students': 2,
        }
        response = teacher_client.post(reverse('jobs:list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['title'] == 'Sort the archive'
        assert response.data['status'] == JobStatus.OPEN
        assert response.data['subject']['code'] == 'MAT'

    def test_reward_limits_validated(self, teacher_client, subject):
        data = {
            'title': 'Too generous',
            'description': 'x',
            'subject_id': str(subject.id),
            'xp_reward': 0,
            'money_reward': -1,
        }
        response = teacher_client.post(reverse('jobs:list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'xp_reward' in response.data
        assert 'money_reward' in response.data

    def test_student_cannot_create(self, student_client, subject):
        data = {
            'title': 'Mine',
            'description': 'x',
            'subject_id': str(subject.id),
            'xp_reward': 10,
            'money_reward': 0,
        }
        response = student_client.post(reverse('jobs:list'), data, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_teacher_lists_own_jobs(self, teacher_client, job, applied_assignment):
        response = teacher_client.get(reverse('jobs:list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['assignments'][0]['status'] == AssignmentStatus.APPLIED

    def test_student_lists_open_jobs(self, api_client, enrolled_student, job):
        authenticate(api_client, enrolled_student)

        response = api_client.get(reverse('jobs:list'))

        assert response.status_code == status.HTTP_200_OK
        assert [j['id'] for j in response.data] == [str(job.id)]
        assert response.data[0]['my_assignment'] is None


@pytest.mark.django_db
class TestApplyEndpoint:

    def test_student_applies(self, student_client, job):
        response = student_client.post(reverse('jobs:apply', kwargs={'job_id': job.id}))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == AssignmentStatus.APPLIED

    def test_duplicate_is_conflict(self, student_client, job, applied_assignment):
        response = student_client.post(reverse('jobs:apply', kwargs={'job_id': job.id}))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'conflict'

    def test_full_job(self, api_client, solo_job, student, other_student):
        JobAssignment.objects.create(job=solo_job, student=student)
        authenticate(api_client, other_student)

        response = api_client.post(reverse('jobs:apply', kwargs={'job_id': solo_job.id}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Job is full'

    def test_missing_job(self, student_client):
        url = reverse('jobs:apply', kwargs={'job_id': '00000000-0000-0000-0000-000000000000'})
        response = student_client.post(url)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_teacher_cannot_apply(self, teacher_client, job):
        response = teacher_client.post(reverse('jobs:apply', kwargs={'job_id': job.id}))
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestReviewEndpoint:

    def test_approve(self, teacher_client, job, applied_assignment):
        response = teacher_client.post(
            reverse('jobs:review', kwargs={'job_id': job.id}),
            {'assignment_id': str(applied_assignment.id), 'action': 'approve'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == AssignmentStatus.APPROVED

    def test_unknown_action(self, teacher_client, job, applied_assignment):
        response = teacher_client.post(
            reverse('jobs:review', kwargs={'job_id': job.id}),
            {'assignment_id': str(applied_assignment.id), 'action': 'promote'},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_other_teacher_forbidden(self, api_client, other_teacher, job, applied_assignment):
        authenticate(api_client, other_teacher)

        response = api_client.post(
            reverse('jobs:review', kwargs={'job_id': job.id}),
            {'assignment_id': str(applied_assignment.id), 'action': 'reject'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'forbidden'

    def test_wrong_source_state(self, teacher_client, job, applied_assignment):
        response = teacher_client.post(
            reverse('jobs:review', kwargs={'job_id': job.id}),
            {'assignment_id': str(applied_assignment.id), 'action': 'return'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_state'
        assert response.data['status'] == AssignmentStatus.APPLIED


@pytest.mark.django_db
class TestCloseEndpoint:

    def test_close_pays_out(self, teacher_client, job, approved_pair):
        response = teacher_client.post(
            reverse('jobs:close', kwargs={'job_id': job.id}),
            HTTP_X_REQUEST_ID='close-api',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['job']['status'] == JobStatus.CLOSED
        assert [p['xp_amount'] for p in response.data['payouts']] == [50, 50]
        assert [p['money_amount'] for p in response.data['payouts']] == [25, 25]
        assert response.data['remainder'] == {'xp': 1, 'money': 1}
        assert all(a['status'] == AssignmentStatus.COMPLETED for a in response.data['job']['assignments'])

    def test_close_twice(self, teacher_client, job):
        url = reverse('jobs:close', kwargs={'job_id': job.id})
        teacher_client.post(url)

        response = teacher_client.post(url)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_other_teacher_forbidden(self, api_client, other_teacher, job):
        authenticate(api_client, other_teacher)

        response = api_client.post(reverse('jobs:close', kwargs={'job_id': job.id}))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Job.objects.get(id=job.id).status == JobStatus.OPEN


@pytest.mark.django_db
class TestStatsEndpoint:

    def test_stats(self, teacher_client, job, applied_assignment):
        response = teacher_client.get(reverse('jobs:stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_jobs'] == 1
        assert response.data['pending_applications'] == 1
