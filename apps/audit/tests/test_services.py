import logging

import pytest

from apps.audit.models import LogLevel, SystemLog
from apps.audit.services import MAX_MESSAGE_LENGTH, get_recent_logs, log_event, sanitize_message


class TestSanitizeMessage:

    def test_strips_control_characters(self):
        assert sanitize_message('job\x00_closed\x1b') == 'job_closed'

    def test_keeps_newlines_and_tabs(self):
        assert sanitize_message('a\tb\nc') == 'a\tb\nc'

    def test_caps_length(self):
        assert len(sanitize_message('x' * 2000)) == MAX_MESSAGE_LENGTH


@pytest.mark.django_db
class TestLogEvent:

    def test_persists_entry(self, teacher):
        entry = log_event(
            LogLevel.INFO,
            'job_created',
            user_id=teacher.id,
            request_id='req-1',
            metadata={'job_id': teacher.id, 'xp_reward': 10},
        )

        stored = SystemLog.objects.get(id=entry.id)
        assert stored.level == LogLevel.INFO
        assert stored.user == teacher
        assert stored.request_id == 'req-1'
        # UUIDs are stored as strings
        assert stored.metadata == {'job_id': str(teacher.id), 'xp_reward': 10}

    def test_mirrors_to_logger(self, caplog):
        with caplog.at_level(logging.WARNING, logger='apps.audit.services'):
            log_event(LogLevel.WARN, 'job_payout_remainder', metadata={'xp': 1})

        assert 'job_payout_remainder' in caplog.text

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            log_event('FATAL', 'nope')

    def test_recent_logs_filters(self, teacher):
        log_event(LogLevel.INFO, 'a', user_id=teacher.id)
        log_event(LogLevel.ERROR, 'b')

        assert [log.message for log in get_recent_logs(level=LogLevel.ERROR)] == ['b']
        assert [log.message for log in get_recent_logs(user_id=teacher.id)] == ['a']
