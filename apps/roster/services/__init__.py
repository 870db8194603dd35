"""Services for roster storage and Bakalari sync."""

from .exceptions import (
    RosterServiceError,
    ExternalRefNotFoundError,
    SubjectNotFoundError,
)
from .external_refs import (
    upsert_external_ref,
    find_external_ref,
    resolve_external_ref,
    get_subject,
    get_enrolled_subject_ids,
)
from .sync import sync_roster

__all__ = [
    # Exceptions
    'RosterServiceError',
    'ExternalRefNotFoundError',
    'SubjectNotFoundError',
    # Services
    'upsert_external_ref',
    'find_external_ref',
    'resolve_external_ref',
    'get_subject',
    'get_enrolled_subject_ids',
    'sync_roster',
]
