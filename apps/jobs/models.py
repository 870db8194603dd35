# ==========================================
# apps/jobs/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class JobStatus(models.TextChoices):
    OPEN = 'OPEN', 'Open'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    CLOSED = 'CLOSED', 'Closed'


class AssignmentStatus(models.TextChoices):
    APPLIED = 'APPLIED', 'Applied'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'
    COMPLETED = 'COMPLETED', 'Completed'


class Job(models.Model):
    """
    A task a teacher posts for students.

    Rewards are fixed at creation. On close they are split evenly between
    the approved students; see ``apps.jobs.services.closing``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    subject = models.ForeignKey('roster.Subject', on_delete=models.PROTECT, related_name='jobs')
    teacher = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='created_jobs')
    xp_reward = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    money_reward = models.PositiveIntegerField(default=0)
    max_students = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    status = models.CharField(max_length=11, choices=JobStatus.choices, default=JobStatus.OPEN)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    closed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'jobs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['teacher', 'status'], name='job_teacher_status_idx'),
            models.Index(fields=['subject', 'status'], name='job_subject_status_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def is_closed(self):
        return self.status == JobStatus.CLOSED


class JobAssignment(models.Model):
    """A student's application to a job and its review outcome."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='assignments')
    student = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='job_assignments')
    status = models.CharField(max_length=9, choices=AssignmentStatus.choices, default=AssignmentStatus.APPLIED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'job_assignments'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['job', 'student'], name='unique_assignment_per_job'),
        ]
        indexes = [
            models.Index(fields=['student', 'status'], name='assignment_student_idx'),
        ]

    def __str__(self):
        return f"{self.student} -> {self.job} ({self.status})"
