"""
Identity and role lookups used by every ledger service.

Callers run these inside their own transaction; ``lock=True`` takes a row
lock on the user, which serializes balance-changing operations per user.
"""

from django.core.exceptions import ValidationError

from apps.accounts.models import User, UserRole

from .exceptions import InsufficientRoleError, UserNotFoundError


def get_user(*, user_id, lock=False, label='User'):
    queryset = User.objects.filter(is_active=True)
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=user_id)
    except (User.DoesNotExist, ValidationError):
        raise UserNotFoundError(f"{label} with ID {user_id} not found")


def get_user_with_role(*, user_id, roles, lock=False):
    """
    Load an active user and verify they hold one of the given roles.

    Raises:
        InsufficientRoleError: If the user is missing or holds another role.
            A missing granter is an authorization failure, not a lookup miss.
    """
    queryset = User.objects.filter(is_active=True)
    if lock:
        queryset = queryset.select_for_update()
    user = queryset.filter(id=user_id).first()

    if user is None or user.role not in roles:
        allowed = ', '.join(str(role) for role in roles)
        raise InsufficientRoleError(f"Operation requires one of roles: {allowed}")
    return user


def require_staff(*, user_id):
    """Teachers and operators may act on jobs, grants and budgets."""
    return get_user_with_role(user_id=user_id, roles=[UserRole.TEACHER, UserRole.OPERATOR])


def require_operator(*, user_id):
    return get_user_with_role(user_id=user_id, roles=[UserRole.OPERATOR])
