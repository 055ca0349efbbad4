"""Gamification API: read progress, record a practice event, reset."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from nuancevault.db.session import get_db
from nuancevault.models.user import User
from nuancevault.routers.auth import get_current_user
from nuancevault.schemas.gamification import (
    GamificationOutSchema,
    MessageOutSchema,
    PracticeInSchema,
    PracticeOutSchema,
    ProgressOutSchema,
)
from nuancevault.services.progress import get_gamification, record_practice, reset_gamification

router = APIRouter(prefix="/api/tools/nuancevault", tags=["gamification"])


@router.get("/gamification", response_model=GamificationOutSchema)
async def read_gamification(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Current user's progress; data is null until the first practice."""
    record = await get_gamification(db, current_user.id)
    return GamificationOutSchema(data=ProgressOutSchema.from_record(record) if record else None)


@router.post("/gamification/practice", response_model=PracticeOutSchema)
async def post_practice(
    body: PracticeInSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Record one self-reported attempt on a set; return the updated record and XP gained."""
    result = await record_practice(db, current_user.id, body.set_id, body.was_correct)
    return PracticeOutSchema(data=ProgressOutSchema.from_record(result.record), xp_gain=result.xp_gain)


@router.post("/gamification/reset", response_model=MessageOutSchema)
async def post_reset(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    await reset_gamification(db, current_user.id)
    return MessageOutSchema(message="Gamification reset")
