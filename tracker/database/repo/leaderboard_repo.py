from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.database.base import new_id
from tracker.database.models import LeaderboardEntry, Period, RankType, Student
from tracker.database.records import LeaderboardRecord
from tracker.database.upsert import dialect_insert


# ------------------------
# Shared row DTO
# ------------------------

@dataclass(frozen=True, slots=True)
class LeaderRow:
    rank: int
    student_id: str
    roll_no: str
    name: str
    total_solved: int
    streak: int


# =========================================================
# WRITE: one scope rewritten per run
# =========================================================

async def replace_scope(
    session: AsyncSession,
    entries: list[LeaderboardRecord],
    *,
    rank_type: RankType,
    period: Period,
    now: datetime,
) -> int:
    """
    Rewrites the (rank_type, period) slice: one multi-row upsert for the
    fresh entries, plus removal of rows for students no longer ranked.
    Callers run this inside a single transaction.
    """
    if not entries:
        return 0

    for e in entries:
        if e.rank_type != rank_type or e.period != period:
            raise ValueError(
                f"entry for {e.student_id} is {e.rank_type.value}/{e.period.value}, "
                f"expected {rank_type.value}/{period.value}"
            )

    student_ids = [e.student_id for e in entries]

    await session.execute(
        delete(LeaderboardEntry).where(
            LeaderboardEntry.rank_type == rank_type,
            LeaderboardEntry.period == period,
            LeaderboardEntry.student_id.not_in(student_ids),
        )
    )

    stmt = dialect_insert(session, LeaderboardEntry).values(
        [
            {
                "id": new_id(),
                "student_id": e.student_id,
                "rank_type": rank_type,
                "period": period,
                "rank": e.rank,
                "total_solved": e.total_solved,
                "streak": e.streak,
                "last_updated": now,
            }
            for e in entries
        ]
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["student_id", "rank_type", "period"],
        set_={
            "rank": stmt.excluded.rank,
            "total_solved": stmt.excluded.total_solved,
            "streak": stmt.excluded.streak,
            "last_updated": stmt.excluded.last_updated,
        },
    )
    await session.execute(stmt)
    return len(entries)


# =========================================================
# READ: what the presentation layer consumes
# =========================================================

async def get_top(
    session: AsyncSession,
    *,
    rank_type: RankType = RankType.COLLEGE,
    period: Period = Period.DAILY,
    limit: int = 10,
) -> list[LeaderRow]:
    q = (
        select(
            LeaderboardEntry.rank,
            LeaderboardEntry.student_id,
            Student.roll_no,
            Student.name,
            LeaderboardEntry.total_solved,
            LeaderboardEntry.streak,
        )
        .join(Student, Student.id == LeaderboardEntry.student_id)
        .where(
            LeaderboardEntry.rank_type == rank_type,
            LeaderboardEntry.period == period,
        )
        .order_by(LeaderboardEntry.rank.asc(), LeaderboardEntry.student_id.asc())
        .limit(limit)
    )

    res = await session.execute(q)
    rows: list[LeaderRow] = []

    for rank, student_id, roll_no, name, total_solved, streak in res.all():
        rows.append(
            LeaderRow(
                rank=int(rank or 0),
                student_id=str(student_id),
                roll_no=roll_no,
                name=name,
                total_solved=int(total_solved or 0),
                streak=int(streak or 0),
            )
        )

    return rows


async def get_entry(
    session: AsyncSession,
    student_id: str,
    *,
    rank_type: RankType = RankType.COLLEGE,
    period: Period = Period.DAILY,
) -> LeaderboardRecord | None:
    res = await session.execute(
        select(LeaderboardEntry).where(
            LeaderboardEntry.student_id == student_id,
            LeaderboardEntry.rank_type == rank_type,
            LeaderboardEntry.period == period,
        )
    )
    row = res.scalar_one_or_none()
    if row is None or row.rank is None:
        return None

    return LeaderboardRecord(
        student_id=str(row.student_id),
        rank=int(row.rank),
        total_solved=int(row.total_solved or 0),
        streak=int(row.streak or 0),
        rank_type=RankType(row.rank_type),
        period=Period(row.period),
    )
