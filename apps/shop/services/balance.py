"""
Money ledger.

There is no stored balance column: a balance is always the replay of a
user's MoneyTx rows (EARNED, REFUND and GRANT add; SPENT subtracts).
"""

from django.db.models import Q, Sum
from django.db.models.functions import Coalesce

from apps.shop.models import CREDIT_TYPES, MoneyTx, MoneyTxType


def get_user_balance(*, user_id):
    """
    Replay all money transactions for a user.

    No floor at zero is applied; a negative result means the ledger holds
    more debits than credits.
    """
    totals = MoneyTx.objects.filter(user_id=user_id).aggregate(
        credits=Coalesce(Sum('amount', filter=Q(type__in=CREDIT_TYPES)), 0),
        debits=Coalesce(Sum('amount', filter=Q(type=MoneyTxType.SPENT)), 0),
    )
    return totals['credits'] - totals['debits']


def append_money_tx(*, user_id, amount, tx_type, reason, request_id=None):
    return MoneyTx.objects.create(
        user_id=user_id,
        amount=amount,
        type=tx_type,
        reason=reason,
        request_id=request_id,
    )


def get_money_history(*, user_id, limit=None):
    queryset = MoneyTx.objects.filter(user_id=user_id).order_by('-created_at')
    if limit:
        queryset = queryset[:limit]
    return list(queryset)
