import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.conftest import authenticate
from apps.xp.models import TeacherDailyBudget, XPAudit


@pytest.mark.django_db
class TestGrantEndpoint:
    """Tests for POST /api/xp/grant/"""

    def test_teacher_grants_xp(self, teacher_client, student, subject):
        url = reverse('xp:grant')
        data = {
            'student_id': str(student.id),
            'subject_id': str(subject.id),
            'amount': 20,
            'reason': 'Great presentation',
        }
        response = teacher_client.post(url, data, format='json', HTTP_X_REQUEST_ID='grant-1')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['amount'] == 20
        assert response.data['request_id'] == 'grant-1'

    def test_retry_with_same_header_is_idempotent(self, teacher_client, student, subject):
        url = reverse('xp:grant')
        data = {
            'student_id': str(student.id),
            'subject_id': str(subject.id),
            'amount': 20,
            'reason': 'Great presentation',
        }
        first = teacher_client.post(url, data, format='json', HTTP_X_REQUEST_ID='grant-2')
        second = teacher_client.post(url, data, format='json', HTTP_X_REQUEST_ID='grant-2')

        assert first.data['id'] == second.data['id']
        assert XPAudit.objects.count() == 1

    def test_budget_exceeded_maps_to_400(self, teacher_client, student, subject, nearly_spent_budget):
        url = reverse('xp:grant')
        data = {
            'student_id': str(student.id),
            'subject_id': str(subject.id),
            'amount': 100,
            'reason': 'Too much',
        }
        response = teacher_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'budget_exceeded'
        assert response.data['remaining'] == 50

    def test_student_cannot_grant(self, student_client, student, subject):
        url = reverse('xp:grant')
        data = {
            'student_id': str(student.id),
            'subject_id': str(subject.id),
            'amount': 10,
            'reason': 'Self-service',
        }
        response = student_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_amount(self, teacher_client, student, subject):
        url = reverse('xp:grant')
        data = {
            'student_id': str(student.id),
            'subject_id': str(subject.id),
            'amount': 0,
            'reason': 'Nothing',
        }
        response = teacher_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data

    def test_unknown_subject_is_404(self, teacher_client, student):
        url = reverse('xp:grant')
        data = {
            'student_id': str(student.id),
            'subject_id': '00000000-0000-0000-0000-000000000000',
            'amount': 10,
            'reason': 'Lost',
        }
        response = teacher_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unauthenticated(self, api_client):
        response = api_client.post(reverse('xp:grant'), {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestStudentXPEndpoint:
    """Tests for GET /api/xp/student/"""

    def test_student_sees_own_xp(self, student_client, student_with_xp):
        response = student_client.get(reverse('xp:student'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_xp'] == 300
        assert response.data['level'] == 2
        assert len(response.data['recent_grants']) == 3

    def test_student_cannot_view_others(self, student_client, other_student):
        response = student_client.get(reverse('xp:student'), {'student_id': str(other_student.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_teacher_views_student(self, teacher_client, student_with_xp):
        response = teacher_client.get(reverse('xp:student'), {'student_id': str(student_with_xp.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['student_id'] == str(student_with_xp.id)


@pytest.mark.django_db
class TestBudgetEndpoints:

    def test_today_for_subject(self, teacher_client, subject, nearly_spent_budget):
        response = teacher_client.get(reverse('xp:budget-today'), {'subject_id': str(subject.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['remaining'] == 50

    def test_today_all_subjects(self, teacher_client, nearly_spent_budget):
        response = teacher_client.get(reverse('xp:budget-today'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['summary']['total_used'] == 950

    def test_student_has_no_budget(self, student_client):
        response = student_client.get(reverse('xp:budget-today'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_operator_sets_budget(self, operator_client, teacher, subject):
        data = {'teacher_id': str(teacher.id), 'subject_id': str(subject.id), 'budget': 1500}
        response = operator_client.post(reverse('xp:budget-set'), data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert TeacherDailyBudget.objects.get(teacher=teacher).budget == 1500

    def test_teacher_cannot_set_budget(self, teacher_client, teacher, subject):
        data = {'teacher_id': str(teacher.id), 'subject_id': str(subject.id), 'budget': 1500}
        response = teacher_client.post(reverse('xp:budget-set'), data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestLeaderboardEndpoint:

    def test_leaderboard(self, student, other_student):
        XPAudit.objects.create(user=student, amount=50, reason='a')
        client = authenticate(APIClient(), other_student)

        response = client.get(reverse('xp:leaderboard'), {'limit': 5})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['user_id'] == str(student.id)
