from nuancevault.services.scoring import (
    advance_daily_streak,
    apply_attempt,
    compute_level_info,
    compute_xp_gain,
    mastery_for,
)

__all__ = [
    "advance_daily_streak",
    "apply_attempt",
    "compute_level_info",
    "compute_xp_gain",
    "mastery_for",
]
