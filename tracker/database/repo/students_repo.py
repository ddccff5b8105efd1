from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.database.models import Student
from tracker.database.records import StudentRecord


async def list_student_ids(session: AsyncSession) -> list[str]:
    res = await session.execute(select(Student.id).order_by(Student.id.asc()))
    return [str(sid) for (sid,) in res.all()]


async def get_student(session: AsyncSession, student_id: str) -> StudentRecord | None:
    res = await session.execute(
        select(Student.id, Student.current_streak).where(Student.id == student_id)
    )
    row = res.first()
    if row is None:
        return None
    sid, streak = row
    return StudentRecord(id=str(sid), current_streak=max(int(streak or 0), 0))


async def get_streaks(session: AsyncSession, student_ids: Iterable[str]) -> dict[str, int]:
    """
    current_streak for exactly the given ids, one IN (...) query.
    Ids that do not exist map to 0.
    """
    ids = list(dict.fromkeys(student_ids))
    if not ids:
        return {}

    res = await session.execute(
        select(Student.id, Student.current_streak).where(Student.id.in_(ids))
    )
    found = {str(sid): max(int(streak or 0), 0) for sid, streak in res.all()}
    return {sid: found.get(sid, 0) for sid in ids}


async def set_current_streak(session: AsyncSession, student_id: str, streak: int) -> None:
    if streak < 0:
        raise ValueError(f"streak must be non-negative, got {streak}")
    await session.execute(
        update(Student).where(Student.id == student_id).values(current_streak=int(streak))
    )
