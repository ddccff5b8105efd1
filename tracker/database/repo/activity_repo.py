from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.database.base import new_id
from tracker.database.models import DailyActivity
from tracker.database.records import ActivityRecord, PlatformStats
from tracker.database.upsert import dialect_insert


def _count(value) -> int:
    return max(int(value or 0), 0)


def _to_record(row: DailyActivity) -> ActivityRecord:
    return ActivityRecord(
        student_id=str(row.student_id),
        activity_date=row.activity_date,
        stats=PlatformStats(
            leetcode=_count(row.leetcode_solved),
            codechef=_count(row.codechef_solved),
            codeforces=_count(row.codeforces_solved),
            hackerrank=_count(row.hackerrank_solved),
        ),
        total_solved=_count(row.total_solved),
        is_active=bool(row.is_active),
    )


async def get_activity(
    session: AsyncSession,
    student_id: str,
    activity_date: date,
) -> ActivityRecord | None:
    res = await session.execute(
        select(DailyActivity).where(
            DailyActivity.student_id == student_id,
            DailyActivity.activity_date == activity_date,
        )
    )
    row = res.scalar_one_or_none()
    return _to_record(row) if row else None


async def upsert_activity(
    session: AsyncSession,
    *,
    student_id: str,
    activity_date: date,
    stats: PlatformStats,
    now: datetime,
) -> None:
    """
    Replace the (student, day) row with the full stat vector.
    Re-running for the same day overwrites, never accumulates.
    """
    columns = stats.as_columns()

    stmt = dialect_insert(session, DailyActivity).values(
        id=new_id(),
        student_id=student_id,
        activity_date=activity_date,
        created_at=now,
        updated_at=now,
        **columns,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["student_id", "activity_date"],
        set_={**columns, "updated_at": now},
    )
    await session.execute(stmt)


async def list_activity_for_day(session: AsyncSession, activity_date: date) -> list[ActivityRecord]:
    """
    All rows for the day, best first. Equal totals fall back to ascending student id.
    """
    res = await session.execute(
        select(DailyActivity)
        .where(DailyActivity.activity_date == activity_date)
        .order_by(desc(DailyActivity.total_solved), DailyActivity.student_id.asc())
    )
    return [_to_record(row) for row in res.scalars().all()]
