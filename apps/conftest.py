import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.roster.models import Enrollment, SchoolClass, Subject


def authenticate(client, user):
    """Attach a JWT bearer token for ``user`` to ``client``."""
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture(autouse=True)
def _no_ssl_redirect(settings):
    """Serve the plain-HTTP test client without the production HTTPS redirect."""
    settings.SECURE_SSL_REDIRECT = False


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def operator(db):
    """Create and return an operator."""
    return User.objects.create_user(
        email='operator@school.cz',
        password='TestPass123!',
        display_name='School Operator',
        role=UserRole.OPERATOR,
    )


@pytest.fixture
def teacher(db):
    """Create and return a teacher."""
    return User.objects.create_user(
        email='teacher@school.cz',
        password='TestPass123!',
        display_name='Eva Teacher',
        role=UserRole.TEACHER,
    )


@pytest.fixture
def other_teacher(db):
    """Create and return a second teacher who owns nothing."""
    return User.objects.create_user(
        email='other.teacher@school.cz',
        password='TestPass123!',
        display_name='Petr Teacher',
        role=UserRole.TEACHER,
    )


@pytest.fixture
def school_class(db):
    return SchoolClass.objects.create(name='1.A', grade=1)


@pytest.fixture
def student(db, school_class):
    """Create and return a student in class 1.A."""
    return User.objects.create_user(
        email='student@school.cz',
        password='TestPass123!',
        display_name='Jana Student',
        role=UserRole.STUDENT,
        school_class=school_class,
    )


@pytest.fixture
def other_student(db, school_class):
    return User.objects.create_user(
        email='student2@school.cz',
        password='TestPass123!',
        display_name='Karel Student',
        role=UserRole.STUDENT,
        school_class=school_class,
    )


@pytest.fixture
def third_student(db, school_class):
    return User.objects.create_user(
        email='student3@school.cz',
        password='TestPass123!',
        display_name='Lucie Student',
        role=UserRole.STUDENT,
        school_class=school_class,
    )


@pytest.fixture
def subject(db):
    return Subject.objects.create(name='Mathematics', code='MAT')


@pytest.fixture
def enrolled_student(student, subject, school_class):
    """Student enrolled in the subject fixture."""
    Enrollment.objects.create(user=student, subject=subject, school_class=school_class)
    return student


@pytest.fixture
def operator_client(api_client, operator):
    return authenticate(api_client, operator)


@pytest.fixture
def teacher_client(api_client, teacher):
    return authenticate(api_client, teacher)


@pytest.fixture
def student_client(api_client, student):
    return authenticate(api_client, student)
