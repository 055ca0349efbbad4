"""Gamification progress and per-set progress.

Revision ID: 002
Revises: 001
Create Date: 2025-03-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "gamification_progress",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("total_xp", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("daily_streak", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_practice_day", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_gamification_progress_user_id"), "gamification_progress", ["user_id"], unique=True
    )

    op.create_table(
        "gamification_set_progress",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("progress_id", sa.Integer(), nullable=False),
        sa.Column("set_id", sa.String(64), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("correct", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("streak", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_attempt", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["progress_id"], ["gamification_progress.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("progress_id", "set_id", name="uq_set_progress_progress_set"),
    )
    op.create_index(
        op.f("ix_gamification_set_progress_progress_id"),
        "gamification_set_progress",
        ["progress_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_gamification_set_progress_progress_id"), table_name="gamification_set_progress")
    op.drop_table("gamification_set_progress")
    op.drop_index(op.f("ix_gamification_progress_user_id"), table_name="gamification_progress")
    op.drop_table("gamification_progress")
