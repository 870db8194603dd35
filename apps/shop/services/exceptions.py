"""Domain-specific exceptions for the shop app."""

from apps.core.exceptions import (
    DomainError,
    ForbiddenError,
    InsufficientFundsError,
    InvalidStateError,
    NotFoundError,
)


class ShopServiceError(DomainError):
    """Base exception for all shop service errors."""
    pass


class ItemNotFoundError(ShopServiceError, NotFoundError):
    pass


class ItemInactiveError(ShopServiceError, InvalidStateError):
    """Raised when buying an item that was taken off sale."""
    pass


class BuyerNotFoundError(ShopServiceError, NotFoundError):
    pass


class NotEnoughMoneyError(ShopServiceError, InsufficientFundsError):
    """Raised when the balance is below the item price."""
    pass


class ShopPermissionError(ShopServiceError, ForbiddenError):
    """Raised when a non-operator manages the catalog or grants money."""
    pass


class InvalidMoneyAmountError(ShopServiceError, InvalidStateError):
    pass
