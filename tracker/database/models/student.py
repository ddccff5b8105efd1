# tracker/database/models/student.py
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.database.base import Base, new_id

if TYPE_CHECKING:
    from tracker.database.models.platform_account import PlatformAccount


class Student(Base):
    """
    Enrolled student. Rows are created by the enrollment process;
    this service only ever writes `current_streak`.
    """
    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("current_streak >= 0", name="ck_students_streak_nonneg"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    roll_no: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(128))

    current_streak: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )

    platform_accounts: Mapped[list["PlatformAccount"]] = relationship(
        back_populates="student",
        cascade="all, delete-orphan",
    )
