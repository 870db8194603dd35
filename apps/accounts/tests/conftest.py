import pytest
from apps.accounts.models import User, UserRole


@pytest.fixture
def inactive_teacher(db):
    """Create and return a deactivated teacher."""
    return User.objects.create_user(
        email='inactive@school.cz',
        password='TestPass123!',
        display_name='Inactive Teacher',
        role=UserRole.TEACHER,
        is_active=False,
    )
