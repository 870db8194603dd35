from django.db import models
import uuid


class LogLevel(models.TextChoices):
    DEBUG = 'DEBUG', 'Debug'
    INFO = 'INFO', 'Info'
    WARN = 'WARN', 'Warning'
    ERROR = 'ERROR', 'Error'


class SystemLog(models.Model):
    """Append-only audit trail written by every mutating service call."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    level = models.CharField(max_length=5, choices=LogLevel.choices, default=LogLevel.INFO)
    message = models.CharField(max_length=500)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='system_logs',
    )
    request_id = models.CharField(max_length=64, blank=True, null=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'system_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['level', 'created_at'], name='system_log_level_idx'),
            models.Index(fields=['user', 'created_at'], name='system_log_user_idx'),
        ]

    def __str__(self):
        return f"[{self.level}] {self.message}"
