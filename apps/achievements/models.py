# ==========================================
# apps/achievements/models.py
# ==========================================

from django.db import models
import uuid


class Achievement(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField()
    badge_url = models.URLField(blank=True)
    criteria = models.TextField(blank=True, help_text='How the badge is earned, shown to students')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'achievements'
        ordering = ['-is_active', 'name']

    def __str__(self):
        return self.name


class AchievementAward(models.Model):
    """A badge given to one user. Each badge is awarded at most once per user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='achievement_awards')
    achievement = models.ForeignKey(Achievement, on_delete=models.CASCADE, related_name='awards')
    awarded_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='awarded_achievements'
    )
    request_id = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'achievement_awards'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'achievement'], name='unique_award_per_user'),
        ]

    def __str__(self):
        return f"{self.achievement} -> {self.user}"
