"""Per-user gamification record: apply practice events, read, reset."""
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nuancevault.core.exceptions import PracticeValidationError, ProgressStorageError
from nuancevault.models.progress import ProgressRecord, SetProgressEntry
from nuancevault.services.scoring import (
    advance_daily_streak,
    apply_attempt,
    compute_xp_gain,
    day_key,
)

logger = logging.getLogger(__name__)


@dataclass
class PracticeResult:
    record: ProgressRecord
    xp_gain: int


class ProgressRepository:
    """find/save/delete of progress records keyed by user id."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_one(self, user_id: int) -> ProgressRecord | None:
        result = await self.db.execute(select(ProgressRecord).where(ProgressRecord.user_id == user_id))
        return result.scalar_one_or_none()

    async def save(self, record: ProgressRecord) -> ProgressRecord:
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def delete_one(self, user_id: int) -> bool:
        record = await self.find_one(user_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.commit()
        return True


def _validate_practice(set_id, was_correct) -> None:
    if not isinstance(set_id, str) or not set_id.strip():
        raise PracticeValidationError("set_id and was_correct required")
    if not isinstance(was_correct, bool):
        raise PracticeValidationError("set_id and was_correct required")


async def record_practice(
    db: AsyncSession,
    user_id: int,
    set_id: str,
    was_correct: bool,
    *,
    now: datetime | None = None,
) -> PracticeResult:
    """Apply one practice event to the user's record and persist it.

    The record is created on the first practice. Everything is written in a
    single commit; on failure the session is rolled back and nothing changes.
    """
    _validate_practice(set_id, was_correct)
    now = now or datetime.now()
    today = day_key(now)
    repo = ProgressRepository(db)

    try:
        record = await repo.find_one(user_id)
        if record is None:
            record = ProgressRecord(user_id=user_id, total_xp=0, daily_streak=0, set_progress=[])

        record.daily_streak = advance_daily_streak(record.daily_streak or 0, record.last_practice_day, today)
        record.last_practice_day = today

        entry = record.entry_for(set_id)
        if entry is None:
            entry = SetProgressEntry(set_id=set_id, attempts=0, correct=0, streak=0)
            record.set_progress.append(entry)

        stats = apply_attempt(entry.attempts, entry.correct, entry.streak, was_correct)
        entry.attempts = stats.attempts
        entry.correct = stats.correct
        entry.streak = stats.streak
        entry.last_attempt = now

        xp_gain = compute_xp_gain(was_correct, entry.streak)
        record.total_xp = (record.total_xp or 0) + xp_gain

        await repo.save(record)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Failed to record practice for user %s on set %s", user_id, set_id)
        raise ProgressStorageError("Failed to record practice") from exc

    logger.debug(
        "Practice user=%s set=%s correct=%s xp+%d total=%d daily_streak=%d",
        user_id, set_id, was_correct, xp_gain, record.total_xp, record.daily_streak,
    )
    return PracticeResult(record=record, xp_gain=xp_gain)


async def get_gamification(db: AsyncSession, user_id: int) -> ProgressRecord | None:
    """Return the user's record, or None if they never practised."""
    try:
        return await ProgressRepository(db).find_one(user_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to load gamification for user %s", user_id)
        raise ProgressStorageError("Failed to load gamification") from exc


async def reset_gamification(db: AsyncSession, user_id: int) -> None:
    """Delete the user's record. Deleting a missing record is not an error."""
    try:
        deleted = await ProgressRepository(db).delete_one(user_id)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Failed to reset gamification for user %s", user_id)
        raise ProgressStorageError("Failed to reset") from exc
    if deleted:
        logger.info("Gamification reset for user %s", user_id)
