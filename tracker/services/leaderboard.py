# tracker/services/leaderboard.py
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime

from tracker.database.models import Period, RankType
from tracker.database.records import ActivityRecord, LeaderboardRecord
from tracker.services.store import SyncStore
from tracker.utils.dates import utc_now

log = logging.getLogger(__name__)


def rank_entries(
    activities: list[ActivityRecord],
    streaks: Mapping[str, int],
    *,
    rank_type: RankType = RankType.COLLEGE,
    period: Period = Period.DAILY,
) -> list[LeaderboardRecord]:
    """
    1-based ranks by total_solved desc; equal totals ordered by ascending
    student id, so every student gets a distinct rank and reruns agree.
    """
    ordered = sorted(activities, key=lambda a: (-a.total_solved, a.student_id))
    return [
        LeaderboardRecord(
            student_id=a.student_id,
            rank=i,
            total_solved=a.total_solved,
            streak=int(streaks.get(a.student_id, 0)),
            rank_type=rank_type,
            period=period,
        )
        for i, a in enumerate(ordered, start=1)
    ]


class LeaderboardService:
    def __init__(self, store: SyncStore, *, clock: Callable[[], datetime] = utc_now) -> None:
        self.store = store
        self.clock = clock

    async def update_leaderboards(self, today: date) -> int:
        """
        Rebuild the college/daily ranking for `today`.
        Returns the number of ranked students (0 when nobody has a row).
        """
        activities = await self.store.list_activity_for_day(today)
        if not activities:
            log.info("No activity rows for %s, leaderboard left unchanged", today)
            return 0

        streaks = await self.store.get_streaks(a.student_id for a in activities)
        entries = rank_entries(activities, streaks)

        await self.store.replace_leaderboard(
            entries,
            rank_type=RankType.COLLEGE,
            period=Period.DAILY,
            updated_at=self.clock(),
        )

        log.info("Leaderboard updated: day=%s ranked=%d", today, len(entries))
        return len(entries)
