"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserNotFoundError,
    InsufficientRoleError,
)
from .roles import get_user, get_user_with_role, require_staff, require_operator

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserNotFoundError',
    'InsufficientRoleError',
    # Services
    'get_user',
    'get_user_with_role',
    'require_staff',
    'require_operator',
]
