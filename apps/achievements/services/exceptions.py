"""Domain-specific exceptions for the achievements app."""

from apps.core.exceptions import ConflictError, DomainError, ForbiddenError, NotFoundError


class AchievementServiceError(DomainError):
    pass


class AchievementNotFoundError(AchievementServiceError, NotFoundError):
    """Raised when the achievement is missing or inactive."""
    pass


class RecipientNotFoundError(AchievementServiceError, NotFoundError):
    pass


class AlreadyAwardedError(AchievementServiceError, ConflictError):
    pass


class AchievementPermissionError(AchievementServiceError, ForbiddenError):
    pass


class AchievementExistsError(AchievementServiceError, ConflictError):
    pass
