import uuid
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import apps.xp.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('roster', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='XPAudit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.IntegerField()),
                ('reason', models.CharField(max_length=255)),
                ('request_id', models.CharField(blank=True, max_length=64, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='xp_audits', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'xp_audits',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'created_at'], name='xp_audit_user_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('request_id__isnull', False)), fields=('user', 'reason', 'request_id'), name='unique_xp_grant_per_request')],
            },
        ),
        migrations.CreateModel(
            name='TeacherDailyBudget',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('budget', models.PositiveIntegerField(default=apps.xp.models.default_daily_budget)),
                ('used', models.PositiveIntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('subject', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_budgets', to='roster.subject')),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_budgets', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'teacher_daily_budgets',
                'ordering': ['-date'],
                'constraints': [models.UniqueConstraint(fields=('teacher', 'subject', 'date'), name='unique_budget_per_teacher_subject_day')],
            },
        ),
    ]
