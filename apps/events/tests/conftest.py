from datetime import timedelta

import pytest
from django.utils import timezone

from apps.events.models import Event


@pytest.fixture
def running_event(db, operator):
    """Event that started an hour ago and ends tomorrow."""
    now = timezone.now()
    return Event.objects.create(
        title='Science Fair',
        starts_at=now - timedelta(hours=1),
        ends_at=now + timedelta(days=1),
        xp_bonus=75,
        created_by=operator,
    )


@pytest.fixture
def future_event(db, operator):
    return Event.objects.create(
        title='Sports Day',
        starts_at=timezone.now() + timedelta(days=7),
        xp_bonus=40,
        created_by=operator,
    )
