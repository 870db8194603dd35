"""
Purchase service.

Buying locks the item row, then the buyer's row, so concurrent purchases by
the same user are serialized and the balance replay inside the transaction
is consistent.
"""

import logging
from datetime import timedelta
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.services import UserNotFoundError, get_user
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.core.request_ids import normalize_request_id
from apps.shop.models import Item, MoneyTxType, Purchase

from .balance import append_money_tx, get_user_balance
from .exceptions import (
    BuyerNotFoundError,
    ItemInactiveError,
    ItemNotFoundError,
    NotEnoughMoneyError,
)

logger = logging.getLogger(__name__)


def _find_previous_purchase(*, user, item, request_id):
    """
    Return the purchase this request repeats, if any.

    With a request id the match is exact on (user, request_id). Without one,
    the same item at the same price bought within the duplicate window counts
    as a double submission.
    """
    if request_id:
        return (
            Purchase.objects
            .select_related('item')
            .filter(user=user, request_id=request_id)
            .first()
        )

    window = timedelta(seconds=settings.EDURPG_PURCHASE_DUPLICATE_WINDOW_SECONDS)
    return (
        Purchase.objects
        .select_related('item')
        .filter(
            user=user,
            item=item,
            price=item.price,
            created_at__gte=timezone.now() - window,
        )
        .order_by('-created_at')
        .first()
    )


@transaction.atomic
def buy_item(*, item_id: UUID, user_id: UUID, request_id: str = None) -> dict:
    """
    Buy one item.

    Args:
        item_id: UUID of the item
        user_id: UUID of the buyer
        request_id: Optional idempotency key

    Returns:
        Dict with ``purchase``, ``item``, ``balance`` (after the purchase)
        and ``duplicate`` (True when an earlier purchase was returned)

    Raises:
        ItemNotFoundError: If the item doesn't exist
        ItemInactiveError: If the item is not on sale
        BuyerNotFoundError: If the buyer doesn't exist
        NotEnoughMoneyError: If balance < price
    """
    request_id = normalize_request_id(request_id)

    try:
        item = Item.objects.select_for_update().get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")

    if not item.is_active:
        raise ItemInactiveError(f"{item.name} is not available")

    try:
        user = get_user(user_id=user_id, lock=True)
    except UserNotFoundError as e:
        raise BuyerNotFoundError(str(e))

    previous = _find_previous_purchase(user=user, item=item, request_id=request_id)
    if previous is not None:
        logger.info("Duplicate purchase request by %s returned %s", user.id, previous.id)
        return {
            'purchase': previous,
            'item': previous.item,
            'balance': get_user_balance(user_id=user.id),
            'duplicate': True,
        }

    balance = get_user_balance(user_id=user.id)
    if balance < item.price:
        raise NotEnoughMoneyError(
            f"Insufficient funds: balance {balance}, price {item.price}",
            balance=balance,
            price=item.price,
        )

    purchase = Purchase.objects.create(
        user=user,
        item=item,
        price=item.price,
        request_id=request_id,
    )
    append_money_tx(
        user_id=user.id,
        amount=item.price,
        tx_type=MoneyTxType.SPENT,
        reason=f"Purchase: {item.name}",
        request_id=request_id,
    )

    log_event(
        LogLevel.INFO,
        'item_purchased',
        user_id=user.id,
        request_id=request_id,
        metadata={
            'item_id': item.id,
            'item_name': item.name,
            'price': item.price,
            'balance_after': balance - item.price,
        },
    )

    return {
        'purchase': purchase,
        'item': item,
        'balance': balance - item.price,
        'duplicate': False,
    }


def get_user_purchases(*, user_id):
    return list(
        Purchase.objects
        .filter(user_id=user_id)
        .select_related('item')
        .order_by('-created_at')
    )
