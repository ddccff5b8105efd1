# tracker/services/store.py
from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Protocol

from tracker.database import Database
from tracker.database.models import Period, RankType
from tracker.database.records import AccountRecord, ActivityRecord, LeaderboardRecord, PlatformStats
from tracker.database.repo import accounts_repo, activity_repo, leaderboard_repo, students_repo
from tracker.database.tx import committing


class SyncStore(Protocol):
    """
    Everything the sync engine needs from the backing store.
    Injected into each component; tests substitute an in-memory version.
    """

    async def list_student_ids(self) -> list[str]: ...

    async def list_accounts(self, student_id: str) -> list[AccountRecord]: ...

    async def get_activity(self, student_id: str, activity_date: date) -> ActivityRecord | None: ...

    async def get_current_streak(self, student_id: str) -> int: ...

    async def commit_student_day(
        self,
        *,
        student_id: str,
        activity_date: date,
        stats: PlatformStats,
        streak: int,
        synced_account_ids: Iterable[str],
        synced_at: datetime,
    ) -> None: ...

    async def list_activity_for_day(self, activity_date: date) -> list[ActivityRecord]: ...

    async def get_streaks(self, student_ids: Iterable[str]) -> dict[str, int]: ...

    async def replace_leaderboard(
        self,
        entries: list[LeaderboardRecord],
        *,
        rank_type: RankType,
        period: Period,
        updated_at: datetime,
    ) -> None: ...


class SqlSyncStore:
    """SyncStore over the SQLAlchemy repo layer. One session per call."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_student_ids(self) -> list[str]:
        async with self.db.session() as session:
            return await students_repo.list_student_ids(session)

    async def list_accounts(self, student_id: str) -> list[AccountRecord]:
        async with self.db.session() as session:
            return await accounts_repo.list_accounts(session, student_id)

    async def get_activity(self, student_id: str, activity_date: date) -> ActivityRecord | None:
        async with self.db.session() as session:
            return await activity_repo.get_activity(session, student_id, activity_date)

    async def get_current_streak(self, student_id: str) -> int:
        async with self.db.session() as session:
            student = await students_repo.get_student(session, student_id)
        if student is None:
            raise LookupError(f"student {student_id} not found")
        return student.current_streak

    async def commit_student_day(
        self,
        *,
        student_id: str,
        activity_date: date,
        stats: PlatformStats,
        streak: int,
        synced_account_ids: Iterable[str],
        synced_at: datetime,
    ) -> None:
        # streak, sync stamps and the activity row land together or not at all
        async with self.db.session() as session:
            async with committing(session):
                await accounts_repo.mark_synced(session, synced_account_ids, synced_at)
                await students_repo.set_current_streak(session, student_id, streak)
                await activity_repo.upsert_activity(
                    session,
                    student_id=student_id,
                    activity_date=activity_date,
                    stats=stats,
                    now=synced_at,
                )

    async def list_activity_for_day(self, activity_date: date) -> list[ActivityRecord]:
        async with self.db.session() as session:
            return await activity_repo.list_activity_for_day(session, activity_date)

    async def get_streaks(self, student_ids: Iterable[str]) -> dict[str, int]:
        async with self.db.session() as session:
            return await students_repo.get_streaks(session, student_ids)

    async def replace_leaderboard(
        self,
        entries: list[LeaderboardRecord],
        *,
        rank_type: RankType,
        period: Period,
        updated_at: datetime,
    ) -> None:
        async with self.db.session() as session:
            async with committing(session):
                await leaderboard_repo.replace_scope(
                    session,
                    entries,
                    rank_type=rank_type,
                    period=period,
                    now=updated_at,
                )
