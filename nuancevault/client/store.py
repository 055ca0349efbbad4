"""Client-side progress state and its durable on-disk cache."""
import logging
import os
from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE = "nuancevault_gamification_v1.json"


class LocalSetStats(BaseModel):
    id: str
    attempts: int = 0
    correct: int = 0
    streak: int = 0
    last_attempt: datetime | None = None


class LocalProgressState(BaseModel):
    total_xp: int = 0
    daily_streak: int = 0
    last_practice_day: date | None = None
    sets: dict[str, LocalSetStats] = Field(default_factory=dict)


class LocalProgressCache:
    """Last-known progress persisted as JSON so it survives restarts."""

    def __init__(self, path: str | Path = DEFAULT_CACHE_FILE):
        self.path = Path(path)

    def load(self) -> LocalProgressState | None:
        if not self.path.exists():
            return None
        try:
            return LocalProgressState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            logger.warning("Ignoring unreadable progress cache %s: %s", self.path, exc)
            return None

    def save(self, state: LocalProgressState) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(state.model_dump_json(), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.warning("Could not write progress cache %s: %s", self.path, exc)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
