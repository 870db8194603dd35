import pytest
from django.urls import reverse
from rest_framework import status

from apps.conftest import authenticate


@pytest.mark.django_db
class TestAchievementsEndpoint:

    def test_operator_creates(self, operator_client):
        data = {'name': 'Helper', 'description': 'Helped a classmate.'}
        response = operator_client.post(reverse('achievements:list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Helper'

    def test_duplicate_name_is_conflict(self, operator_client, achievement):
        data = {'name': 'First Job', 'description': 'Again.'}
        response = operator_client.post(reverse('achievements:list'), data, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_student_sees_only_active(self, student_client, achievement, retired_achievement):
        response = student_client.get(reverse('achievements:list'))

        assert response.status_code == status.HTTP_200_OK
        assert [a['name'] for a in response.data] == ['First Job']


@pytest.mark.django_db
class TestAwardEndpoint:

    def test_operator_awards(self, operator_client, student, achievement):
        url = reverse('achievements:award', kwargs={'achievement_id': achievement.id})
        response = operator_client.post(url, {'user_id': str(student.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['id'] == str(student.id)

    def test_duplicate_award_is_conflict(self, operator_client, student, achievement):
        url = reverse('achievements:award', kwargs={'achievement_id': achievement.id})
        operator_client.post(url, {'user_id': str(student.id)}, format='json')

        response = operator_client.post(url, {'user_id': str(student.id)}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_teacher_cannot_award(self, teacher_client, student, achievement):
        url = reverse('achievements:award', kwargs={'achievement_id': achievement.id})
        response = teacher_client.post(url, {'user_id': str(student.id)}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_my_achievements(self, api_client, operator, student, achievement):
        authenticate(api_client, operator)
        url = reverse('achievements:award', kwargs={'achievement_id': achievement.id})
        api_client.post(url, {'user_id': str(student.id)}, format='json')

        authenticate(api_client, student)
        response = api_client.get(reverse('achievements:mine'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['achievement']['name'] == 'First Job'
