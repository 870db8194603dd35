"""
Domain error taxonomy shared by every EduRPG service.

Each app subclasses these in its own ``services/exceptions.py`` so views can
catch app-specific errors while the DRF exception handler maps every domain
error to an HTTP status by kind.
"""

from rest_framework import status


class DomainError(Exception):
    """Base exception for all domain rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = 'domain_error'

    def __init__(self, message='', **details):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(DomainError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = 'not_found'


class ForbiddenError(DomainError):
    """Caller lacks the role or ownership required for the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    code = 'forbidden'


class InvalidStateError(DomainError):
    """Entity is not in a state that permits the requested transition."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = 'invalid_state'


class ConflictError(DomainError):
    """A uniqueness rule would be violated."""

    status_code = status.HTTP_409_CONFLICT
    code = 'conflict'


class BudgetExceededError(DomainError):
    """A teacher's daily XP budget would be exceeded."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = 'budget_exceeded'

    def __init__(self, message='', *, remaining=0, **details):
        super().__init__(message, remaining=remaining, **details)
        self.remaining = remaining


class InsufficientFundsError(DomainError):
    """A purchase would drive the balance below the item price."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = 'insufficient_funds'

    def __init__(self, message='', *, balance=0, price=0, **details):
        super().__init__(message, balance=balance, price=price, **details)
        self.balance = balance
        self.price = price
