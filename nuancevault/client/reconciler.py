"""Optimistic client state for gamification.

A practice is applied locally first, using the same scoring functions as the
server, then sent to the server. The server's answer overwrites the local
totals and set entries (last server write wins). A failed sync keeps the
optimistic state and only raises the ``error`` flag; nothing is retried.
"""
import logging
import re
from datetime import datetime
from typing import Any

from nuancevault.client.api import GamificationAPI, GamificationSyncError
from nuancevault.client.store import LocalProgressCache, LocalProgressState, LocalSetStats
from nuancevault.services.scoring import (
    LevelInfo,
    advance_daily_streak,
    apply_attempt,
    compute_level_info,
    compute_xp_gain,
    day_key,
    mastery_for,
)

logger = logging.getLogger(__name__)

# Sets saved in the catalog carry 24-hex object ids; anything else is local-only
PERSISTED_SET_ID_RE = re.compile(r"^[a-f\d]{24}$", re.IGNORECASE)


def is_persisted_set_id(set_key: str) -> bool:
    return bool(PERSISTED_SET_ID_RE.match(set_key))


class OptimisticProgress:
    def __init__(self, api: GamificationAPI, cache: LocalProgressCache):
        self.api = api
        self.cache = cache
        self.state = LocalProgressState()
        self.syncing = False
        self.optimistic = False
        self.error: str | None = None

    @property
    def level_info(self) -> LevelInfo:
        return compute_level_info(self.state.total_xp)

    def mastery_for(self, set_key: str) -> int:
        return mastery_for(self.state.sets.get(set_key))

    async def load(self) -> None:
        """Show the cached state right away, then reconcile with the server."""
        cached = self.cache.load()
        if cached is not None:
            self.state = cached
        await self.sync_from_server()

    async def sync_from_server(self) -> None:
        self.syncing = True
        self.error = None
        try:
            remote = await self.api.get_gamification()
            self.merge_server(remote)
        except GamificationSyncError:
            self.error = "Failed to sync gamification"
        finally:
            self.syncing = False

    def merge_server(self, remote: dict[str, Any] | None) -> None:
        """Overwrite local totals with the server's; union set entries, server wins."""
        if not remote:
            return
        sets = dict(self.state.sets)
        for entry in remote.get("set_progress") or []:
            sets[entry["set_id"]] = LocalSetStats(
                id=entry["set_id"],
                attempts=entry["attempts"],
                correct=entry["correct"],
                streak=entry["streak"],
                last_attempt=entry.get("last_attempt"),
            )
        prev = self.state
        self.state = LocalProgressState(
            total_xp=remote.get("total_xp", prev.total_xp),
            daily_streak=remote.get("daily_streak", prev.daily_streak),
            last_practice_day=remote.get("last_practice_day") or prev.last_practice_day,
            sets=sets,
        )
        self.cache.save(self.state)

    def apply_local(self, set_key: str, was_correct: bool, now: datetime) -> int:
        """Optimistic update; returns the XP gained locally."""
        prev = self.state
        today = day_key(now)
        existing = prev.sets.get(set_key) or LocalSetStats(id=set_key)
        stats = apply_attempt(existing.attempts, existing.correct, existing.streak, was_correct)
        xp_gain = compute_xp_gain(was_correct, stats.streak)

        sets = dict(prev.sets)
        sets[set_key] = LocalSetStats(
            id=set_key,
            attempts=stats.attempts,
            correct=stats.correct,
            streak=stats.streak,
            last_attempt=now,
        )
        self.state = LocalProgressState(
            total_xp=prev.total_xp + xp_gain,
            daily_streak=advance_daily_streak(prev.daily_streak, prev.last_practice_day, today),
            last_practice_day=today,
            sets=sets,
        )
        self.cache.save(self.state)
        return xp_gain

    async def record_practice(self, set_key: str, was_correct: bool, *, now: datetime | None = None) -> int:
        """Apply locally, then sync persisted sets. Returns the optimistic XP gain."""
        self.optimistic = True
        self.error = None
        try:
            xp_gain = self.apply_local(set_key, was_correct, now or datetime.now())
            if not is_persisted_set_id(set_key):
                logger.debug("Set %s is local-only; practice not synced", set_key)
                return xp_gain
            try:
                body = await self.api.record_practice(set_key, was_correct)
                self.merge_server(body.get("data"))
            except GamificationSyncError:
                self.error = "Practice sync failed"
            return xp_gain
        finally:
            self.optimistic = False

    async def reset_progress(self) -> None:
        self.state = LocalProgressState()
        self.cache.clear()
        try:
            await self.api.reset_gamification()
        except GamificationSyncError:
            self.error = "Reset sync failed"
