"""
External reference mapping.

Bakalari identifiers are never stored on the synced rows themselves (except
``User.bakalari_id``); the (type, external_id) -> internal_id table is what
makes a re-sync update rows instead of duplicating them.
"""

from apps.roster.models import Enrollment, ExternalRef, Subject

from .exceptions import ExternalRefNotFoundError, SubjectNotFoundError


def upsert_external_ref(*, ref_type, external_id, internal_id, metadata=None):
    """
    Create or repoint the mapping for (ref_type, external_id).

    Returns:
        Tuple of (ExternalRef, created)
    """
    return ExternalRef.objects.update_or_create(
        type=ref_type,
        external_id=str(external_id),
        defaults={
            'internal_id': internal_id,
            'metadata': metadata,
        },
    )


def find_external_ref(*, ref_type, external_id):
    """Return the mapped internal id, or None when the identifier is unknown."""
    return (
        ExternalRef.objects
        .filter(type=ref_type, external_id=str(external_id))
        .values_list('internal_id', flat=True)
        .first()
    )


def resolve_external_ref(*, ref_type, external_id):
    """
    Like ``find_external_ref`` but raises when nothing is mapped.

    Raises:
        ExternalRefNotFoundError: If (ref_type, external_id) was never synced
    """
    internal_id = find_external_ref(ref_type=ref_type, external_id=external_id)
    if internal_id is None:
        raise ExternalRefNotFoundError(
            f"No {ref_type} synced for external ID {external_id}"
        )
    return internal_id


def get_subject(*, subject_id):
    try:
        return Subject.objects.get(id=subject_id)
    except Subject.DoesNotExist:
        raise SubjectNotFoundError(f"Subject with ID {subject_id} not found")


def get_enrolled_subject_ids(*, user_id, class_id=None):
    queryset = Enrollment.objects.filter(user_id=user_id)
    if class_id:
        queryset = queryset.filter(school_class_id=class_id)
    return list(queryset.values_list('subject_id', flat=True))
