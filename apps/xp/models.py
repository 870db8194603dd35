# ==========================================
# apps/xp/models.py
# ==========================================

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid


def default_daily_budget():
    return settings.EDURPG_DEFAULT_DAILY_XP_BUDGET


class XPAudit(models.Model):
    """
    Immutable record of one XP grant.

    A user's total XP is the sum of their rows; rows are never updated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='xp_audits')
    amount = models.IntegerField()
    reason = models.CharField(max_length=255)
    request_id = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'xp_audits'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'reason', 'request_id'],
                condition=models.Q(request_id__isnull=False),
                name='unique_xp_grant_per_request',
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'created_at'], name='xp_audit_user_idx'),
        ]

    def __str__(self):
        return f"{self.user} +{self.amount} XP ({self.reason})"


class TeacherDailyBudget(models.Model):
    """XP a teacher may still grant in one subject on one day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    teacher = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='daily_budgets')
    subject = models.ForeignKey('roster.Subject', on_delete=models.CASCADE, related_name='daily_budgets')
    date = models.DateField()
    budget = models.PositiveIntegerField(default=default_daily_budget)
    used = models.PositiveIntegerField(default=0, validators=[MinValueValidator(0)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'teacher_daily_budgets'
        ordering = ['-date']
        constraints = [
            models.UniqueConstraint(
                fields=['teacher', 'subject', 'date'],
                name='unique_budget_per_teacher_subject_day',
            ),
        ]

    def __str__(self):
        return f"{self.teacher} {self.subject.code} {self.date}: {self.used}/{self.budget}"

    @property
    def remaining(self):
        return max(0, self.budget - self.used)
