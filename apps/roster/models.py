# ==========================================
# apps/roster/models.py
# ==========================================

from django.db import models
import uuid


class SchoolClass(models.Model):
    """A class of students (e.g. ``1.A``) mirrored from Bakalari."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=50)
    grade = models.PositiveSmallIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'school_classes'
        ordering = ['grade', 'name']
        verbose_name_plural = 'school classes'

    def __str__(self):
        return self.name


class Subject(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=20, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subjects'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.code})"


class Enrollment(models.Model):
    """A student attending a subject, optionally within a class."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='enrollments')
    subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name='enrollments')
    school_class = models.ForeignKey(
        SchoolClass,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='enrollments',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'enrollments'
        constraints = [
            models.UniqueConstraint(fields=['user', 'subject'], name='unique_enrollment_per_subject'),
        ]
        indexes = [
            models.Index(fields=['school_class', 'subject'], name='enrollment_class_subj_idx'),
        ]

    def __str__(self):
        return f"{self.user} in {self.subject.code}"


class ExternalRefType(models.TextChoices):
    CLASS = 'class', 'Class'
    SUBJECT = 'subject', 'Subject'
    USER = 'user', 'User'
    ENROLLMENT = 'enrollment', 'Enrollment'


class ExternalRef(models.Model):
    """Maps a Bakalari identifier to the internal row it was synced into."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=20, choices=ExternalRefType.choices)
    external_id = models.CharField(max_length=128)
    internal_id = models.UUIDField(db_index=True)
    metadata = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'external_refs'
        constraints = [
            models.UniqueConstraint(fields=['type', 'external_id'], name='unique_external_ref'),
        ]
        indexes = [
            models.Index(fields=['type'], name='external_ref_type_idx'),
        ]

    def __str__(self):
        return f"{self.type}:{self.external_id} -> {self.internal_id}"
