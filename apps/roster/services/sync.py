"""
Roster synchronization from already-fetched Bakalari records.

Fetching from Bakalari is not done here; callers pass the decoded records::

    {
        "classes":  [{"id": "C1A", "abbrev": "1.A"}],
        "subjects": [{"id": "MAT", "code": "MAT", "name": "Matematika"}],
        "users":    [{"id": "U100", "full_name": "Jana Novakova",
                      "user_type": "student", "class_id": "C1A",
                      "subjects": ["MAT"]}],
    }

Every record is applied in its own savepoint. A bad record is reported in
``errors`` and the rest of the run continues; re-running the same payload
updates the same rows.
"""

import logging
import re
import time
import uuid

from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.roster.models import Enrollment, ExternalRefType, SchoolClass, Subject

from .external_refs import find_external_ref, upsert_external_ref

logger = logging.getLogger(__name__)

_GRADE_PREFIX = re.compile(r'^(\d+)')


def role_for_user_type(user_type):
    if str(user_type).lower() == 'teacher':
        return UserRole.TEACHER
    return UserRole.STUDENT


def grade_from_class_name(name):
    """``"3.B"`` -> 3; names without a leading number fall back to grade 1."""
    match = _GRADE_PREFIX.match(name or '')
    return int(match.group(1)) if match else 1


def _new_result():
    return {
        'success': False,
        'classes_created': 0,
        'classes_updated': 0,
        'subjects_created': 0,
        'subjects_updated': 0,
        'users_created': 0,
        'users_updated': 0,
        'enrollments_created': 0,
        'enrollments_updated': 0,
        'errors': [],
    }


def _sync_class(record, result):
    external_id = record.get('id') or record['abbrev']
    name = record.get('abbrev') or record['name']

    internal_id = find_external_ref(ref_type=ExternalRefType.CLASS, external_id=external_id)
    if internal_id and SchoolClass.objects.filter(id=internal_id).update(
        name=name,
        grade=grade_from_class_name(name),
        updated_at=timezone.now(),
    ):
        result['classes_updated'] += 1
        return

    school_class = SchoolClass.objects.create(name=name, grade=grade_from_class_name(name))
    upsert_external_ref(
        ref_type=ExternalRefType.CLASS,
        external_id=external_id,
        internal_id=school_class.id,
        metadata={'abbrev': record.get('abbrev')},
    )
    result['classes_created'] += 1


def _sync_subject(record, result):
    external_id = record.get('id') or record['code']
    code = record.get('code') or record['id']

    internal_id = find_external_ref(ref_type=ExternalRefType.SUBJECT, external_id=external_id)
    if internal_id and Subject.objects.filter(id=internal_id).update(
        name=record['name'],
        code=code,
        updated_at=timezone.now(),
    ):
        result['subjects_updated'] += 1
        return

    subject = Subject.objects.create(name=record['name'], code=code)
    upsert_external_ref(
        ref_type=ExternalRefType.SUBJECT,
        external_id=external_id,
        internal_id=subject.id,
        metadata={'code': record.get('code')},
    )
    result['subjects_created'] += 1


def _sync_user(record, result):
    external_id = str(record['id'])
    role = role_for_user_type(record.get('user_type', 'student'))

    class_id = None
    if role == UserRole.STUDENT and record.get('class_id'):
        class_id = find_external_ref(ref_type=ExternalRefType.CLASS, external_id=record['class_id'])

    internal_id = find_external_ref(ref_type=ExternalRefType.USER, external_id=external_id)
    user = User.objects.filter(id=internal_id).first() if internal_id else None

    if user is not None:
        user.display_name = record.get('full_name', user.display_name)
        user.school_class_id = class_id
        user.save(update_fields=['display_name', 'school_class'])
        result['users_updated'] += 1
    else:
        user = User.objects.create_user(
            email=f"{external_id}@bakalari.local",
            password=None,
            display_name=record.get('full_name', ''),
            role=role,
            bakalari_id=external_id,
            school_class_id=class_id,
        )
        upsert_external_ref(
            ref_type=ExternalRefType.USER,
            external_id=external_id,
            internal_id=user.id,
            metadata={'user_type': record.get('user_type')},
        )
        result['users_created'] += 1

    if role != UserRole.STUDENT or class_id is None:
        return

    for subject_external_id in record.get('subjects', []):
        subject_id = find_external_ref(
            ref_type=ExternalRefType.SUBJECT,
            external_id=subject_external_id,
        )
        if subject_id is None:
            result['errors'].append(
                f"Unknown subject {subject_external_id} for user {external_id}"
            )
            continue

        enrollment, created = Enrollment.objects.update_or_create(
            user=user,
            subject_id=subject_id,
            defaults={'school_class_id': class_id},
        )
        upsert_external_ref(
            ref_type=ExternalRefType.ENROLLMENT,
            external_id=f"{user.id}-{subject_id}",
            internal_id=enrollment.id,
            metadata={'class_id': str(class_id)},
        )
        if created:
            result['enrollments_created'] += 1
        else:
            result['enrollments_updated'] += 1


def _summary(result):
    summary = {key: value for key, value in result.items() if key != 'errors'}
    summary['error_count'] = len(result['errors'])
    return summary


def _apply(records, handler, label, result):
    for record in records:
        try:
            with transaction.atomic():
                handler(record, result)
        except (KeyError, ValueError, DatabaseError) as e:
            message = f"Error syncing {label} {record!r}: {e}"
            logger.warning(message)
            result['errors'].append(message)


@transaction.atomic
def sync_roster(payload, *, operator_id=None, request_id=None):
    """
    Upsert classes, subjects, users and enrollments from Bakalari records.

    Classes and subjects are applied first so users can reference them.

    Args:
        payload: Dict with optional ``classes``, ``subjects`` and ``users`` lists
        operator_id: Operator who triggered the run (for the audit trail)
        request_id: Idempotency key of the originating request

    Returns:
        Dict of created/updated counters plus ``errors``, ``run_id``,
        ``started_at``, ``completed_at`` and ``duration_ms``
    """
    run_id = str(uuid.uuid4())
    started_at = timezone.now()
    started = time.monotonic()
    result = _new_result()

    log_event(
        LogLevel.INFO,
        'sync_start',
        user_id=operator_id,
        request_id=request_id,
        metadata={'run_id': run_id},
    )

    _apply(payload.get('classes', []), _sync_class, 'class', result)
    _apply(payload.get('subjects', []), _sync_subject, 'subject', result)
    _apply(payload.get('users', []), _sync_user, 'user', result)

    result['success'] = not result['errors']
    result['run_id'] = run_id
    result['started_at'] = started_at.isoformat()
    result['completed_at'] = timezone.now().isoformat()
    result['duration_ms'] = int((time.monotonic() - started) * 1000)

    log_event(
        LogLevel.INFO if result['success'] else LogLevel.WARN,
        'sync_complete',
        user_id=operator_id,
        request_id=request_id,
        metadata=_summary(result),
    )
    return result
