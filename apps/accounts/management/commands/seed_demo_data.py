"""
Management command to create a demo school.

Usage:
    python manage.py seed_demo_data [--clear]

This creates:
- 1 operator, 2 teachers, 4 students in two classes
- 3 subjects with enrollments
- Jobs in every lifecycle state, one closed with payouts
- XP grants within the teachers' daily budgets
- Shop items and a purchase
- A running event and an achievement award

Everything except users and roster rows goes through the service layer,
so the demo ledger looks exactly like one produced by the API.
"""

from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.achievements.models import Achievement, AchievementAward
from apps.achievements.services import award_achievement, create_achievement
from apps.audit.models import SystemLog
from apps.events.models import Event, EventParticipation
from apps.events.services import create_event, participate_in_event
from apps.jobs.models import Job, JobAssignment
from apps.jobs.services import (
    apply_for_job,
    approve_job_assignment,
    close_job,
    create_job,
    reject_job_assignment,
)
from apps.roster.models import Enrollment, SchoolClass, Subject
from apps.shop.models import Item, ItemRarity, ItemType, MoneyTx, Purchase
from apps.shop.services import buy_item, create_item, grant_money
from apps.xp.models import TeacherDailyBudget, XPAudit
from apps.xp.services import grant_xp

DEMO_PASSWORD = 'demo12345'


class Command(BaseCommand):
    help = 'Create a demo school with jobs, XP, shop items and events'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete existing ledger and roster data first',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()
        elif Job.objects.exists():
            raise CommandError('Data already present; rerun with --clear to replace it')

        self.stdout.write('Creating demo school...')

        users = self.create_users()
        subjects = self.create_roster(users)
        self.create_jobs(users, subjects)
        self.create_grants(users, subjects)
        self.create_shop(users)
        self.create_events(users)

        self.stdout.write(self.style.SUCCESS('Demo data created successfully!'))
        self.stdout.write('')
        self.stdout.write(f'Accounts (password "{DEMO_PASSWORD}"):')
        for user in users.values():
            self.stdout.write(f'  {user.email} ({user.role})')

    def clear_data(self):
        for model in (
            AchievementAward, Achievement, EventParticipation, Event,
            Purchase, MoneyTx, Item, XPAudit, TeacherDailyBudget,
            JobAssignment, Job, Enrollment, SystemLog,
        ):
            model.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        Subject.objects.all().delete()
        SchoolClass.objects.all().delete()

    def create_users(self):
        specs = [
            ('operator', 'operator@demo.school', 'Olga Operator', UserRole.OPERATOR),
            ('novak', 'novak@demo.school', 'Jan Novak', UserRole.TEACHER),
            ('svoboda', 'svoboda@demo.school', 'Marie Svobodova', UserRole.TEACHER),
            ('anna', 'anna@demo.school', 'Anna Kralova', UserRole.STUDENT),
            ('david', 'david@demo.school', 'David Dvorak', UserRole.STUDENT),
            ('eva', 'eva@demo.school', 'Eva Cerna', UserRole.STUDENT),
            ('filip', 'filip@demo.school', 'Filip Vesely', UserRole.STUDENT),
        ]
        users = {}
        for key, email, name, role in specs:
            user, created = User.objects.get_or_create(
                email=email,
                defaults={'display_name': name, 'role': role},
            )
            if created:
                user.set_password(DEMO_PASSWORD)
                user.save()
            users[key] = user
        self.stdout.write(f'  Created {len(users)} users')
        return users

    def create_roster(self, users):
        class_a, _ = SchoolClass.objects.get_or_create(name='6.A', defaults={'grade': 6})
        class_b, _ = SchoolClass.objects.get_or_create(name='7.B', defaults={'grade': 7})

        subjects = {}
        for code, name in [('MAT', 'Mathematics'), ('CHE', 'Chemistry'), ('ENG', 'English')]:
            subjects[code], _ = Subject.objects.get_or_create(code=code, defaults={'name': name})

        placements = {'anna': class_a, 'david': class_a, 'eva': class_b, 'filip': class_b}
        for key, school_class in placements.items():
            student = users[key]
            student.school_class = school_class
            student.save(update_fields=['school_class'])
            for subject in subjects.values():
                Enrollment.objects.get_or_create(
                    user=student, subject=subject, defaults={'school_class': school_class}
                )

        self.stdout.write(f'  Created 2 classes and {len(subjects)} subjects')
        return subjects

    def create_jobs(self, users, subjects):
        novak = users['novak']

        lab = create_job(
            title='Clean the chemistry lab',
            description='Wipe the benches and sort the glassware.',
            subject_id=subjects['CHE'].id,
            teacher_id=novak.id,
            xp_reward=101,
            money_reward=51,
            max_students=2,
        )
        for key in ('anna', 'david'):
            assignment = apply_for_job(job_id=lab.id, student_id=users[key].id)
            approve_job_assignment(assignment_id=assignment.id, teacher_id=novak.id)
        close_job(job_id=lab.id, teacher_id=novak.id)

        tutoring = create_job(
            title='Tutor a classmate in fractions',
            description='Two sessions after school.',
            subject_id=subjects['MAT'].id,
            teacher_id=novak.id,
            xp_reward=60,
            money_reward=20,
            max_students=3,
        )
        applied = apply_for_job(job_id=tutoring.id, student_id=users['eva'].id)
        approve_job_assignment(assignment_id=applied.id, teacher_id=novak.id)
        rejected = apply_for_job(job_id=tutoring.id, student_id=users['filip'].id)
        reject_job_assignment(assignment_id=rejected.id, teacher_id=novak.id)

        create_job(
            title='Write a book review',
            description='One page about any English novel.',
            subject_id=subjects['ENG'].id,
            teacher_id=users['svoboda'].id,
            xp_reward=40,
            money_reward=10,
        )
        self.stdout.write('  Created 3 jobs (one closed with payouts)')

    def create_grants(self, users, subjects):
        grants = [
            ('svoboda', 'eva', 'ENG', 35, 'Great presentation'),
            ('svoboda', 'filip', 'ENG', 20, 'Homework streak'),
            ('novak', 'anna', 'MAT', 50, 'Olympiad qualification'),
        ]
        for teacher, student, subject, amount, reason in grants:
            grant_xp(
                student_id=users[student].id,
                teacher_id=users[teacher].id,
                subject_id=subjects[subject].id,
                amount=amount,
                reason=reason,
            )
        self.stdout.write(f'  Created {len(grants)} XP grants')

    def create_shop(self, users):
        operator = users['operator']
        catalog = [
            ('Sticker pack', 10, ItemRarity.COMMON, ItemType.COLLECTIBLE),
            ('Extra homework day', 40, ItemRarity.RARE, ItemType.BOOST),
            ('Golden avatar frame', 120, ItemRarity.LEGENDARY, ItemType.COSMETIC),
        ]
        items = [
            create_item(operator_id=operator.id, name=name, price=price, rarity=rarity, type=item_type)
            for name, price, rarity, item_type in catalog
        ]

        grant_money(
            user_id=users['filip'].id,
            operator_id=operator.id,
            amount=15,
            reason='Welcome bonus',
        )
        buy_item(item_id=items[0].id, user_id=users['anna'].id, request_id='demo-purchase-1')
        self.stdout.write(f'  Created {len(items)} shop items and 1 purchase')

    def create_events(self, users):
        operator = users['operator']
        now = timezone.now()

        fair = create_event(
            created_by_id=operator.id,
            title='Science Fair',
            description='Show a project to the whole school.',
            starts_at=now - timedelta(hours=1),
            ends_at=now + timedelta(days=2),
            xp_bonus=25,
            rarity_reward=ItemRarity.RARE,
        )
        participate_in_event(event_id=fair.id, user_id=users['david'].id)

        badge = create_achievement(
            operator_id=operator.id,
            name='First Job',
            description='Complete your first job.',
            criteria='Be approved on a job that gets closed.',
        )
        for key in ('anna', 'david'):
            award_achievement(
                achievement_id=badge.id,
                user_id=users[key].id,
                awarded_by_id=operator.id,
            )
        self.stdout.write('  Created 1 event and 1 achievement')
