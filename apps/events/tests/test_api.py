import pytest
from django.urls import reverse
from rest_framework import status

from apps.xp.models import XPAudit


@pytest.mark.django_db
class TestEventsEndpoint:

    def test_operator_creates_event(self, operator_client):
        data = {
            'title': 'Book Week',
            'starts_at': '2030-03-01T08:00:00Z',
            'ends_at': '2030-03-07T16:00:00Z',
            'xp_bonus': 30,
        }
        response = operator_client.post(reverse('events:list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['xp_bonus'] == 30
        assert response.data['participant_count'] == 0

    def test_end_before_start_rejected(self, operator_client):
        data = {
            'title': 'Book Week',
            'starts_at': '2030-03-07T08:00:00Z',
            'ends_at': '2030-03-01T16:00:00Z',
        }
        response = operator_client.post(reverse('events:list'), data, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_student_cannot_create(self, student_client):
        data = {'title': 'Party', 'starts_at': '2030-03-01T08:00:00Z'}
        response = student_client.post(reverse('events:list'), data, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_student_lists_events(self, student_client, running_event):
        response = student_client.get(reverse('events:list'))

        assert response.status_code == status.HTTP_200_OK
        assert [e['title'] for e in response.data] == ['Science Fair']


@pytest.mark.django_db
class TestParticipateEndpoint:

    def test_participate(self, student_client, student, running_event):
        url = reverse('events:participate', kwargs={'event_id': running_event.id})
        response = student_client.post(url, HTTP_X_REQUEST_ID='evt-api')

        assert response.status_code == status.HTTP_201_CREATED
        assert XPAudit.objects.get(user=student).amount == 75

    def test_participate_twice_conflicts(self, student_client, running_event):
        url = reverse('events:participate', kwargs={'event_id': running_event.id})
        student_client.post(url, HTTP_X_REQUEST_ID='evt-a')

        response = student_client.post(url, HTTP_X_REQUEST_ID='evt-b')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_not_running(self, student_client, future_event):
        url = reverse('events:participate', kwargs={'event_id': future_event.id})
        response = student_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_state'
