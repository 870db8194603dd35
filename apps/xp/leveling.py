"""
Leveling curve.

Pure functions mapping cumulative XP to a level. Nothing here touches the
database, so the curve can be used from serializers, management commands and
tests alike.

Curve shape:
    Per-level cost is ``floor(50 * level^1.5 + 10 * level)`` scaled by a band
    multiplier, so early levels come quickly and the top levels are slow:

    ==========  ==========
    Levels      Multiplier
    ==========  ==========
    2 - 20      0.8
    21 - 60     1.0
    61 - 90     1.2
    91+         1.5
    ==========  ==========

    Level 1 costs nothing; a user with 0 XP is level 1.

Example::

    >>> xp_for_level(2)
    128
    >>> level_from_xp(total_xp_for_level(10))
    10
"""

import math
from typing import NamedTuple

ACHIEVABLE_XP_PER_DAY = 500
DAYS_TO_LEVEL_100 = 1370  # ~3.75 school years


class LevelInfo(NamedTuple):
    level: int
    xp_required: int
    total_xp_for_current_level: int
    xp_for_next_level: int


def _band_multiplier(level):
    if level <= 20:
        return 0.8
    if level <= 60:
        return 1.0
    if level <= 90:
        return 1.2
    return 1.5


def xp_for_level(level):
    """XP needed to go from ``level - 1`` to ``level``."""
    if level <= 1:
        return 0
    base = math.floor(50 * math.pow(level, 1.5) + level * 10)
    return math.floor(base * _band_multiplier(level))


def total_xp_for_level(level):
    """Cumulative XP needed to reach ``level``; 0 for level 0 and 1."""
    return sum(xp_for_level(i) for i in range(1, level + 1))


def level_from_xp(total_xp):
    """Largest level whose cumulative requirement is <= ``total_xp``."""
    if total_xp < 0:
        return 0

    level = 0
    xp_needed = 0
    while xp_needed <= total_xp:
        level += 1
        xp_needed += xp_for_level(level)
    return level - 1


def level_info(total_xp):
    current_level = level_from_xp(total_xp)
    total_for_current = total_xp_for_level(current_level)
    xp_for_next = xp_for_level(current_level + 1)

    return LevelInfo(
        level=current_level,
        xp_required=total_for_current + xp_for_next - total_xp,
        total_xp_for_current_level=total_for_current,
        xp_for_next_level=xp_for_next,
    )


def progress_to_next_level(total_xp):
    """Percentage (0-100) of the current level band already earned."""
    info = level_info(total_xp)
    if info.xp_for_next_level <= 0:
        return 0.0
    xp_in_level = total_xp - info.total_xp_for_current_level
    return min(100.0, max(0.0, xp_in_level / info.xp_for_next_level * 100))


def xp_needed_for_next_level(total_xp):
    return level_info(total_xp).xp_required


def is_level_achievable(level, days_available):
    """Whether ``level`` is reachable in ``days_available`` at a typical pace."""
    return total_xp_for_level(level) / ACHIEVABLE_XP_PER_DAY <= days_available


def recommended_daily_xp():
    return math.ceil(LEVEL_100_TOTAL_XP / DAYS_TO_LEVEL_100)


LEVEL_100_TOTAL_XP = total_xp_for_level(100)

LEVEL_MILESTONES = {
    level: total_xp_for_level(level)
    for level in (10, 25, 50, 75, 90, 100)
}
