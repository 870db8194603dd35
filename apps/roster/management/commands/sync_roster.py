"""
Import a Bakalari roster export.

Usage:
    python manage.py sync_roster roster.json [--operator admin@school.cz]

The file holds ``classes``, ``subjects`` and ``users`` lists in the shape
accepted by ``apps.roster.services.sync_roster``.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.models import User, UserRole
from apps.roster.services import sync_roster


class Command(BaseCommand):
    help = 'Upsert classes, subjects, users and enrollments from a Bakalari JSON export'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Path to the JSON export')
        parser.add_argument(
            '--operator',
            help='Email of the operator recorded in the audit log',
        )

    def handle(self, *args, **options):
        try:
            with open(options['path'], encoding='utf-8') as fh:
                payload = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Cannot read roster export: {e}")

        operator_id = None
        if options['operator']:
            operator = User.objects.filter(
                email=options['operator'], role=UserRole.OPERATOR
            ).first()
            if operator is None:
                raise CommandError(f"No operator with email {options['operator']}")
            operator_id = operator.id

        result = sync_roster(payload, operator_id=operator_id)

        for key in ('classes', 'subjects', 'users', 'enrollments'):
            self.stdout.write(
                f"{key}: {result[f'{key}_created']} created, {result[f'{key}_updated']} updated"
            )
        for error in result['errors']:
            self.stdout.write(self.style.WARNING(error))

        if result['success']:
            self.stdout.write(self.style.SUCCESS(f"Roster sync {result['run_id']} finished"))
        else:
            self.stdout.write(self.style.ERROR(
                f"Roster sync {result['run_id']} finished with {len(result['errors'])} error(s)"
            ))
