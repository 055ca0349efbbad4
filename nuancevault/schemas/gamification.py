"""Pydantic schemas for gamification requests and responses."""
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from nuancevault.models.progress import ProgressRecord
from nuancevault.services.scoring import compute_level_info, mastery_for


class PracticeInSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    set_id: StrictStr = Field(min_length=1, max_length=64, alias="setId")
    was_correct: StrictBool = Field(alias="wasCorrect")


class SetProgressOutSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    set_id: str
    attempts: int
    correct: int
    streak: int
    last_attempt: datetime | None = None
    mastery: int = 0


class ProgressOutSchema(BaseModel):
    user_id: int
    total_xp: int
    daily_streak: int
    last_practice_day: date | None = None
    level: int
    next_level_xp: int
    progress_in_level: int
    level_span: int
    set_progress: list[SetProgressOutSchema]

    @classmethod
    def from_record(cls, record: ProgressRecord) -> "ProgressOutSchema":
        info = compute_level_info(record.total_xp)
        return cls(
            user_id=record.user_id,
            total_xp=record.total_xp,
            daily_streak=record.daily_streak,
            last_practice_day=record.last_practice_day,
            level=info.level,
            next_level_xp=info.next_level_xp,
            progress_in_level=info.progress_in_level,
            level_span=info.level_span,
            set_progress=[
                SetProgressOutSchema(
                    set_id=e.set_id,
                    attempts=e.attempts,
                    correct=e.correct,
                    streak=e.streak,
                    last_attempt=e.last_attempt,
                    mastery=mastery_for(e),
                )
                for e in record.set_progress
            ],
        )


class GamificationOutSchema(BaseModel):
    success: bool = True
    data: ProgressOutSchema | None = None


class PracticeOutSchema(BaseModel):
    success: bool = True
    data: ProgressOutSchema
    xp_gain: int


class MessageOutSchema(BaseModel):
    success: bool = True
    message: str
