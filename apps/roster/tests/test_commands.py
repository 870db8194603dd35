import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.roster.models import SchoolClass, Subject
from apps.roster.tests.test_services import ROSTER_PAYLOAD


@pytest.mark.django_db
class TestSyncRosterCommand:

    def test_imports_export_file(self, tmp_path):
        export = tmp_path / 'roster.json'
        export.write_text(json.dumps(ROSTER_PAYLOAD), encoding='utf-8')
        out = StringIO()

        call_command('sync_roster', str(export), stdout=out)

        assert SchoolClass.objects.count() == 2
        assert Subject.objects.count() == 2
        assert 'classes: 2 created, 0 updated' in out.getvalue()
        assert 'finished' in out.getvalue()

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(CommandError, match='Cannot read roster export'):
            call_command('sync_roster', str(tmp_path / 'missing.json'), stdout=StringIO())

    def test_unknown_operator(self, tmp_path):
        export = tmp_path / 'roster.json'
        export.write_text(json.dumps(ROSTER_PAYLOAD), encoding='utf-8')

        with pytest.raises(CommandError, match='No operator'):
            call_command('sync_roster', str(export), operator='nobody@school.cz', stdout=StringIO())
