"""Services for achievements and badge awards."""

from .exceptions import (
    AchievementServiceError,
    AchievementNotFoundError,
    RecipientNotFoundError,
    AlreadyAwardedError,
    AchievementPermissionError,
    AchievementExistsError,
)
from .awards import (
    award_achievement,
    create_achievement,
    get_achievements,
    get_user_achievements,
)

__all__ = [
    # Exceptions
    'AchievementServiceError',
    'AchievementNotFoundError',
    'RecipientNotFoundError',
    'AlreadyAwardedError',
    'AchievementPermissionError',
    'AchievementExistsError',
    # Services
    'create_achievement',
    'award_achievement',
    'get_achievements',
    'get_user_achievements',
]
