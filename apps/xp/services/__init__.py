"""Services for the XP ledger: grants, budgets and level queries."""

from .exceptions import (
    XPServiceError,
    GranterNotAllowedError,
    StudentNotFoundError,
    TeacherNotFoundError,
    DailyBudgetExceededError,
    InvalidGrantAmountError,
    DuplicateGrantError,
)
from .ledger import append_xp_audit, find_xp_audit, get_total_xp
from .grants import grant_xp
from .budgets import get_teacher_daily_budget, get_teacher_daily_budgets, set_daily_budget
from .queries import get_student_xp, get_xp_leaderboard

__all__ = [
    # Exceptions
    'XPServiceError',
    'GranterNotAllowedError',
    'StudentNotFoundError',
    'TeacherNotFoundError',
    'DailyBudgetExceededError',
    'InvalidGrantAmountError',
    'DuplicateGrantError',
    # Ledger
    'append_xp_audit',
    'find_xp_audit',
    'get_total_xp',
    # Services
    'grant_xp',
    'get_teacher_daily_budget',
    'get_teacher_daily_budgets',
    'set_daily_budget',
    'get_student_xp',
    'get_xp_leaderboard',
]
