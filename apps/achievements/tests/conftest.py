import pytest

from apps.achievements.models import Achievement


@pytest.fixture
def achievement(db):
    return Achievement.objects.create(
        name='First Job',
        description='Complete your first job.',
        criteria='Close one job as an approved student.',
    )


@pytest.fixture
def retired_achievement(db):
    return Achievement.objects.create(name='Beta Tester', description='Old badge.', is_active=False)
