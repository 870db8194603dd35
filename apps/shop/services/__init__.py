"""Services for the shop: balances, purchases, catalog and money grants."""

from .exceptions import (
    ShopServiceError,
    ItemNotFoundError,
    ItemInactiveError,
    BuyerNotFoundError,
    NotEnoughMoneyError,
    ShopPermissionError,
    InvalidMoneyAmountError,
)
from .balance import append_money_tx, get_money_history, get_user_balance
from .purchasing import buy_item, get_user_purchases
from .catalog import (
    create_item,
    get_all_items,
    get_item_stats,
    get_shop_items,
    toggle_item,
    update_item,
)
from .money import grant_money

__all__ = [
    # Exceptions
    'ShopServiceError',
    'ItemNotFoundError',
    'ItemInactiveError',
    'BuyerNotFoundError',
    'NotEnoughMoneyError',
    'ShopPermissionError',
    'InvalidMoneyAmountError',
    # Ledger
    'append_money_tx',
    'get_money_history',
    'get_user_balance',
    # Services
    'buy_item',
    'get_user_purchases',
    'create_item',
    'update_item',
    'toggle_item',
    'get_shop_items',
    'get_all_items',
    'get_item_stats',
    'grant_money',
]
