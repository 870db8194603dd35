"""Item catalog management and reporting."""

from django.db import transaction
from django.db.models import Case, Count, IntegerField, Q, Sum, Value, When
from django.db.models.functions import Coalesce

from apps.accounts.services import InsufficientRoleError, require_operator
from apps.audit.models import LogLevel
from apps.audit.services import log_event
from apps.shop.models import Item, ItemRarity, ItemType, Purchase

from .exceptions import ItemNotFoundError, ShopPermissionError

RARITY_ORDER = [
    ItemRarity.COMMON,
    ItemRarity.UNCOMMON,
    ItemRarity.RARE,
    ItemRarity.EPIC,
    ItemRarity.LEGENDARY,
]

EDITABLE_FIELDS = ('name', 'description', 'price', 'rarity', 'type', 'image_url')


def _rarity_rank():
    return Case(
        *[When(rarity=rarity, then=Value(rank)) for rank, rarity in enumerate(RARITY_ORDER)],
        output_field=IntegerField(),
    )


def _require_operator(operator_id):
    try:
        return require_operator(user_id=operator_id)
    except InsufficientRoleError:
        raise ShopPermissionError("Only operators can manage the shop")


def _get_item_for_update(item_id):
    try:
        return Item.objects.select_for_update().get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")


def get_shop_items():
    """Items on sale, cheapest rarity first."""
    return list(
        Item.objects
        .filter(is_active=True)
        .annotate(rarity_rank=_rarity_rank())
        .order_by('rarity_rank', 'price', 'name')
    )


def get_all_items():
    return list(
        Item.objects
        .annotate(rarity_rank=_rarity_rank())
        .order_by('-is_active', 'rarity_rank', 'price', 'name')
    )


@transaction.atomic
def create_item(*, operator_id, name, price, description='', rarity=ItemRarity.COMMON,
                type=ItemType.COSMETIC, image_url='', is_active=True, request_id=None):
    operator = _require_operator(operator_id)

    item = Item.objects.create(
        name=name,
        description=description,
        price=price,
        rarity=rarity,
        type=type,
        image_url=image_url,
        is_active=is_active,
    )

    log_event(
        LogLevel.INFO,
        'item_created',
        user_id=operator.id,
        request_id=request_id,
        metadata={'item_id': item.id, 'name': item.name, 'price': item.price},
    )
    return item


@transaction.atomic
def update_item(*, item_id, operator_id, request_id=None, **changes):
    """
    Edit catalog fields of an item.

    Unknown keys are ignored. Past purchases keep the price they were
    bought at.
    """
    operator = _require_operator(operator_id)
    item = _get_item_for_update(item_id)

    changed = {}
    for field in EDITABLE_FIELDS:
        if field in changes and getattr(item, field) != changes[field]:
            setattr(item, field, changes[field])
            changed[field] = changes[field]

    if changed:
        item.save(update_fields=[*changed, 'updated_at'])
        log_event(
            LogLevel.INFO,
            'item_updated',
            user_id=operator.id,
            request_id=request_id,
            metadata={'item_id': item.id, 'changes': changed},
        )
    return item


@transaction.atomic
def toggle_item(*, item_id, operator_id, request_id=None):
    operator = _require_operator(operator_id)
    item = _get_item_for_update(item_id)

    item.is_active = not item.is_active
    item.save(update_fields=['is_active', 'updated_at'])

    log_event(
        LogLevel.INFO,
        'item_status_toggled',
        user_id=operator.id,
        request_id=request_id,
        metadata={'item_id': item.id, 'is_active': item.is_active},
    )
    return item


def get_item_stats():
    """Catalog size, sales totals and the best sellers."""
    items = Item.objects.aggregate(
        total_items=Count('id'),
        active_items=Count('id', filter=Q(is_active=True)),
    )
    sales = Purchase.objects.aggregate(
        total_purchases=Count('id'),
        total_revenue=Coalesce(Sum('price'), 0),
    )

    by_rarity = {rarity.value: 0 for rarity in RARITY_ORDER}
    for row in Item.objects.values('rarity').annotate(count=Count('id')):
        by_rarity[row['rarity']] = row['count']

    top_items = (
        Item.objects
        .annotate(
            purchase_count=Count('purchases'),
            revenue=Coalesce(Sum('purchases__price'), 0),
        )
        .filter(purchase_count__gt=0)
        .order_by('-purchase_count', 'name')[:5]
    )

    return {
        **items,
        **sales,
        'by_rarity': by_rarity,
        'top_items': [
            {
                'id': item.id,
                'name': item.name,
                'purchase_count': item.purchase_count,
                'revenue': item.revenue,
            }
            for item in top_items
        ],
    }
