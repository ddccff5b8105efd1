# tracker/database/models/platform_account.py
from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.database.base import Base, enum_values, new_id

if TYPE_CHECKING:
    from tracker.database.models.student import Student


class Platform(str, enum.Enum):
    LEETCODE = "leetcode"
    CODECHEF = "codechef"
    CODEFORCES = "codeforces"
    HACKERRANK = "hackerrank"
    GITHUB = "github"


class PlatformAccount(Base):
    __tablename__ = "platform_accounts"
    __table_args__ = (
        UniqueConstraint("student_id", "platform", name="uq_platform_accounts_student_platform"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    student_id: Mapped[str] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)

    platform: Mapped[Platform] = mapped_column(
        Enum(Platform, native_enum=False, length=16, values_callable=enum_values),
        index=True,
    )
    username: Mapped[str] = mapped_column(String(128))

    connected_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    # stamped on every fetch attempt, zero counts included
    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)

    student: Mapped["Student"] = relationship(back_populates="platform_accounts")
