import uuid

import pytest

from apps.achievements.models import AchievementAward
from apps.achievements.services import (
    AchievementExistsError,
    AchievementNotFoundError,
    AchievementPermissionError,
    AlreadyAwardedError,
    RecipientNotFoundError,
    award_achievement,
    create_achievement,
    get_achievements,
    get_user_achievements,
)
from apps.audit.models import SystemLog


@pytest.mark.django_db
class TestCreateAchievement:

    def test_create(self, operator):
        achievement = create_achievement(
            operator_id=operator.id, name='Bookworm', description='Read ten books.'
        )

        assert achievement.is_active
        assert SystemLog.objects.filter(message='achievement_created').exists()

    def test_duplicate_name(self, operator, achievement):
        with pytest.raises(AchievementExistsError):
            create_achievement(operator_id=operator.id, name='First Job', description='Again')

    def test_teacher_cannot_create(self, teacher):
        with pytest.raises(AchievementPermissionError):
            create_achievement(operator_id=teacher.id, name='Mine', description='x')


@pytest.mark.django_db
class TestAwardAchievement:

    def test_award(self, operator, student, achievement):
        award = award_achievement(
            achievement_id=achievement.id,
            user_id=student.id,
            awarded_by_id=operator.id,
            request_id='award-1',
        )

        assert award.awarded_by == operator
        entry = SystemLog.objects.get(message='achievement_awarded')
        assert entry.user == student
        assert entry.request_id == 'award-1'

    def test_award_twice_conflicts(self, operator, student, achievement):
        award_achievement(achievement_id=achievement.id, user_id=student.id, awarded_by_id=operator.id)

        with pytest.raises(AlreadyAwardedError):
            award_achievement(achievement_id=achievement.id, user_id=student.id, awarded_by_id=operator.id)

        assert AchievementAward.objects.count() == 1

    def test_inactive_achievement(self, operator, student, retired_achievement):
        with pytest.raises(AchievementNotFoundError):
            award_achievement(
                achievement_id=retired_achievement.id, user_id=student.id, awarded_by_id=operator.id
            )

    def test_missing_user(self, operator, achievement):
        with pytest.raises(RecipientNotFoundError):
            award_achievement(
                achievement_id=achievement.id, user_id=uuid.uuid4(), awarded_by_id=operator.id
            )

    def test_teacher_cannot_award(self, teacher, student, achievement):
        with pytest.raises(AchievementPermissionError):
            award_achievement(achievement_id=achievement.id, user_id=student.id, awarded_by_id=teacher.id)


@pytest.mark.django_db
class TestAchievementQueries:

    def test_award_counts(self, operator, student, other_student, achievement, retired_achievement):
        for s in (student, other_student):
            award_achievement(achievement_id=achievement.id, user_id=s.id, awarded_by_id=operator.id)

        result = get_achievements()

        assert [(a.name, a.awards_count) for a in result] == [('First Job', 2), ('Beta Tester', 0)]
        assert get_achievements(include_inactive=False) == [achievement]

    def test_user_achievements(self, operator, student, other_student, achievement):
        award_achievement(achievement_id=achievement.id, user_id=student.id, awarded_by_id=operator.id)

        assert [a.achievement for a in get_user_achievements(user_id=student.id)] == [achievement]
        assert get_user_achievements(user_id=other_student.id) == []
