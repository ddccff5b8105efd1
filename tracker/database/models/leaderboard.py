# tracker/database/models/leaderboard.py
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from tracker.database.base import Base, enum_values, new_id


class RankType(str, enum.Enum):
    COLLEGE = "college"
    DEPARTMENT = "department"
    YEAR = "year"
    SECTION = "section"
    TEAM = "team"


class Period(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    OVERALL = "overall"


class LeaderboardEntry(Base):
    """
    Derived ranking snapshot. Rebuilt from daily_activity + students on
    every run; nothing else writes here.
    """
    __tablename__ = "leaderboard_cache"
    __table_args__ = (
        UniqueConstraint("student_id", "rank_type", "period", name="uq_leaderboard_cache_student_scope"),
        Index("ix_leaderboard_cache_scope_rank", "rank_type", "period", "rank"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    student_id: Mapped[str] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)

    rank_type: Mapped[RankType] = mapped_column(
        Enum(RankType, native_enum=False, length=16, values_callable=enum_values)
    )
    period: Mapped[Period] = mapped_column(
        Enum(Period, native_enum=False, length=16, values_callable=enum_values)
    )

    rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_solved: Mapped[int | None] = mapped_column(Integer, nullable=True)
    streak: Mapped[int] = mapped_column(Integer, default=0)  # snapshot of students.current_streak

    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
