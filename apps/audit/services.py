"""
Audit log sink.

``log_event`` appends a SystemLog row inside the caller's transaction, so an
audit entry commits or rolls back together with the change it describes, and
mirrors the record to the ``apps.audit`` logger.
"""

import json
import logging
import re

from django.core.serializers.json import DjangoJSONEncoder

from .models import LogLevel, SystemLog

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 500

_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b-\x1f\x7f]')

_PYTHON_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def sanitize_message(message):
    """Strip control characters and cap the length of a log message."""
    cleaned = _CONTROL_CHARS.sub('', str(message)).strip()
    return cleaned[:MAX_MESSAGE_LENGTH]


def _json_safe(metadata):
    # UUIDs, datetimes and Decimals end up in metadata; JSONField needs plain types
    return json.loads(json.dumps(metadata or {}, cls=DjangoJSONEncoder))


def log_event(level, message, *, user_id=None, request_id=None, metadata=None):
    """
    Append an audit record.

    Args:
        level: One of LogLevel values (DEBUG, INFO, WARN, ERROR)
        message: Short event name or sentence, e.g. ``item_purchased``
        user_id: Acting or affected user, if any
        request_id: Idempotency key of the originating request
        metadata: JSON-serializable details

    Returns:
        The created SystemLog instance
    """
    if level not in LogLevel.values:
        raise ValueError(f"Unknown log level: {level}")

    message = sanitize_message(message)
    metadata = _json_safe(metadata)

    entry = SystemLog.objects.create(
        level=level,
        message=message,
        user_id=user_id,
        request_id=request_id,
        metadata=metadata,
    )

    logger.log(
        _PYTHON_LEVELS[level],
        "%s user=%s request=%s %s",
        message,
        user_id,
        request_id,
        metadata,
    )
    return entry


def get_recent_logs(*, level=None, user_id=None, limit=50):
    queryset = SystemLog.objects.all()
    if level:
        queryset = queryset.filter(level=level)
    if user_id:
        queryset = queryset.filter(user_id=user_id)
    return list(queryset[:limit])
