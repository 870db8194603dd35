# ==========================================
# apps/events/models.py
# ==========================================

from django.db import models
from django.utils import timezone
import uuid

from apps.shop.models import ItemRarity


class Event(models.Model):
    """Time-boxed school event that pays an XP bonus to participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField(null=True, blank=True)
    xp_bonus = models.PositiveIntegerField(default=0)
    rarity_reward = models.CharField(max_length=10, choices=ItemRarity.choices, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_events'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'events'
        ordering = ['-starts_at']
        indexes = [
            models.Index(fields=['is_active', 'starts_at'], name='event_active_start_idx'),
        ]

    def __str__(self):
        return self.title

    def is_running(self, at=None):
        at = at or timezone.now()
        if at < self.starts_at:
            return False
        return self.ends_at is None or at <= self.ends_at


class EventParticipation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='participations')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='event_participations')
    request_id = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'event_participations'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['event', 'user'], name='unique_participation_per_event'),
        ]

    def __str__(self):
        return f"{self.user} @ {self.event}"
