"""Operator money grants."""

import logging

from django.db import transaction

from apps.accounts.services import (
    InsufficientRoleError,
    UserNotFoundError,
    get_user,
    require_operator,
)
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.core.request_ids import ensure_request_id
from apps.shop.models import MoneyTx, MoneyTxType

from .balance import append_money_tx
from .exceptions import BuyerNotFoundError, InvalidMoneyAmountError, ShopPermissionError

logger = logging.getLogger(__name__)


@transaction.atomic
def grant_money(*, user_id, operator_id, amount, reason, request_id=None):
    """
    Credit money to a user outside of jobs.

    Repeating a call with the same (user, reason, request_id) returns the
    first transaction instead of crediting twice.

    Raises:
        ShopPermissionError: If the caller is not an operator
        InvalidMoneyAmountError: If amount is not positive
        BuyerNotFoundError: If the user doesn't exist
    """
    request_id = ensure_request_id(request_id)

    try:
        operator = require_operator(user_id=operator_id)
    except InsufficientRoleError:
        raise ShopPermissionError("Only operators can grant money")

    if amount <= 0:
        raise InvalidMoneyAmountError("Amount must be positive")

    try:
        user = get_user(user_id=user_id, lock=True)
    except UserNotFoundError as e:
        raise BuyerNotFoundError(str(e))

    existing = MoneyTx.objects.filter(
        user=user,
        type=MoneyTxType.GRANT,
        reason=reason,
        request_id=request_id,
    ).first()
    if existing is not None:
        logger.info("Money grant %s already applied as %s", request_id, existing.id)
        return existing

    tx = append_money_tx(
        user_id=user.id,
        amount=amount,
        tx_type=MoneyTxType.GRANT,
        reason=reason,
        request_id=request_id,
    )

    log_event(
        LogLevel.INFO,
        f"Money granted: {amount} for {reason}",
        user_id=operator.id,
        request_id=request_id,
        metadata={'recipient_id': user.id, 'amount': amount, 'tx_id': tx.id},
    )
    return tx
