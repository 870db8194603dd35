"""
Low-level XP ledger writes shared by grants, job payouts and events.

These helpers assume they run inside the caller's ``transaction.atomic``
block and never commit on their own.
"""

from django.db import IntegrityError
from django.db.models import Sum

from apps.xp.models import XPAudit

from .exceptions import DuplicateGrantError


def find_xp_audit(*, user_id, reason, request_id):
    """Return the grant already recorded for this idempotency key, if any."""
    if not request_id:
        return None
    return XPAudit.objects.filter(
        user_id=user_id,
        reason=reason,
        request_id=request_id,
    ).first()


def append_xp_audit(*, user_id, amount, reason, request_id):
    try:
        return XPAudit.objects.create(
            user_id=user_id,
            amount=amount,
            reason=reason,
            request_id=request_id,
        )
    except IntegrityError:
        raise DuplicateGrantError(
            f"XP for '{reason}' was already granted under request {request_id}"
        )


def get_total_xp(*, user_id):
    total = XPAudit.objects.filter(user_id=user_id).aggregate(total=Sum('amount'))['total']
    return total or 0
