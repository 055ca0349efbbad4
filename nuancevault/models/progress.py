"""Gamification progress: one record per user, one entry per practised set."""
from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from nuancevault.db.session import Base


class ProgressRecord(Base):
    __tablename__ = "gamification_progress"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)

    total_xp = Column(Integer, nullable=False, default=0)
    daily_streak = Column(Integer, nullable=False, default=0)  # consecutive practice days
    last_practice_day = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True
    )

    user = relationship("User", back_populates="progress")
    # selectin: async sessions cannot lazy-load on attribute access
    set_progress = relationship(
        "SetProgressEntry",
        back_populates="record",
        order_by="SetProgressEntry.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def entry_for(self, set_id: str) -> "SetProgressEntry | None":
        for entry in self.set_progress:
            if entry.set_id == set_id:
                return entry
        return None


class SetProgressEntry(Base):
    __tablename__ = "gamification_set_progress"
    __table_args__ = (UniqueConstraint("progress_id", "set_id", name="uq_set_progress_progress_set"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    progress_id = Column(
        Integer, ForeignKey("gamification_progress.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Flashcard set reference; not checked against the catalog
    set_id = Column(String(64), nullable=False)

    attempts = Column(Integer, nullable=False, default=0)
    correct = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)  # consecutive correct answers on this set
    last_attempt = Column(DateTime, nullable=True)

    record = relationship("ProgressRecord", back_populates="set_progress")
