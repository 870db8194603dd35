import pytest
from django.utils import timezone

from apps.xp.models import TeacherDailyBudget, XPAudit


@pytest.fixture
def nearly_spent_budget(db, teacher, subject):
    """Today's budget with 950 of 1000 XP already used."""
    return TeacherDailyBudget.objects.create(
        teacher=teacher,
        subject=subject,
        date=timezone.localdate(),
        budget=1000,
        used=950,
    )


@pytest.fixture
def student_with_xp(db, student):
    """Student with three earlier grants totalling 300 XP."""
    for amount in (50, 100, 150):
        XPAudit.objects.create(user=student, amount=amount, reason=f'Seed {amount}')
    return student
