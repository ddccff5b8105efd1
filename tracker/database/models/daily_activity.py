# tracker/database/models/daily_activity.py
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from tracker.database.base import Base, new_id


class DailyActivity(Base):
    """
    One row per student per calendar day.
    total_solved is always the sum of the four platform counts.
    """
    __tablename__ = "daily_activity"
    __table_args__ = (
        UniqueConstraint("student_id", "activity_date", name="uq_daily_activity_student_date"),
        Index("ix_daily_activity_date_total", "activity_date", "total_solved"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    student_id: Mapped[str] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)
    activity_date: Mapped[date] = mapped_column(Date, index=True)

    leetcode_solved: Mapped[int] = mapped_column(Integer, default=0)
    codechef_solved: Mapped[int] = mapped_column(Integer, default=0)
    codeforces_solved: Mapped[int] = mapped_column(Integer, default=0)
    hackerrank_solved: Mapped[int] = mapped_column(Integer, default=0)

    total_solved: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )
