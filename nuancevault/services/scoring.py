"""XP, level, daily streak and mastery computation.

Pure functions with no I/O. The server-side reconciler and the optimistic
client both import from here so a practice event produces identical numbers
on either side.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol

# XP: miss 2; hit 10 + 2 per streak step, bonus capped at 20
XP_MISS = 2
XP_HIT = 10
STREAK_BONUS_PER_STEP = 2
MAX_STREAK_BONUS = 20

# Cumulative XP needed to reach level n+1 is n(n+1)/2 * LEVEL_XP_UNIT
LEVEL_XP_UNIT = 100


class SetStatsLike(Protocol):
    attempts: int
    correct: int


@dataclass(frozen=True)
class SetStats:
    attempts: int
    correct: int
    streak: int


@dataclass(frozen=True)
class LevelInfo:
    level: int
    next_level_xp: int  # XP still needed for the next level
    progress_in_level: int
    level_span: int


def compute_xp_gain(was_correct: bool, streak_after_attempt: int) -> int:
    """XP for one attempt, given the per-set streak after applying it."""
    if not was_correct:
        return XP_MISS
    xp = XP_HIT
    if streak_after_attempt > 0:
        xp += min(streak_after_attempt * STREAK_BONUS_PER_STEP, MAX_STREAK_BONUS)
    return xp


def day_key(moment: datetime | date) -> date:
    """Truncate a timestamp to its calendar day."""
    if isinstance(moment, datetime):
        return moment.date()
    return moment


def advance_daily_streak(prior_streak: int, last_practice_day: date | None, today: date) -> int:
    """Return the daily streak after a practice on ``today``.

    Same day keeps the streak, the day after extends it, anything else
    (a gap, or a last day in the future) starts over at 1.
    """
    if last_practice_day is None:
        return 1
    if last_practice_day == today:
        return prior_streak
    if last_practice_day == today - timedelta(days=1):
        return prior_streak + 1
    return 1


def apply_attempt(attempts: int, correct: int, streak: int, was_correct: bool) -> SetStats:
    """Per-set counters after one attempt."""
    if was_correct:
        return SetStats(attempts=attempts + 1, correct=correct + 1, streak=streak + 1)
    return SetStats(attempts=attempts + 1, correct=correct, streak=0)


def mastery_for(entry: SetStatsLike | None) -> int:
    """Percentage (0-100) of correct attempts; 0 when nothing was attempted."""
    if entry is None or not entry.attempts:
        return 0
    # half-up, not banker's rounding
    return int(math.floor(100 * entry.correct / entry.attempts + 0.5))


def compute_level_info(total_xp: int) -> LevelInfo:
    """Return level from cumulative XP (level 1 at 0 XP, 2 at 100, 3 at 300...)."""
    level = 1
    while level * (level + 1) // 2 * LEVEL_XP_UNIT <= total_xp:
        level += 1
    prev_threshold = (level - 1) * level // 2 * LEVEL_XP_UNIT
    next_threshold = level * (level + 1) // 2 * LEVEL_XP_UNIT
    return LevelInfo(
        level=level,
        next_level_xp=next_threshold - total_xp,
        progress_in_level=total_xp - prev_threshold,
        level_span=next_threshold - prev_threshold,
    )
