# tracker/services/student_sync.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime

from tracker.database.models import Platform
from tracker.database.records import AccountRecord, PlatformStats
from tracker.platforms.base import PlatformAdapter
from tracker.services.store import SyncStore
from tracker.services.streak import next_streak
from tracker.utils.dates import utc_now

log = logging.getLogger(__name__)


class StudentSyncer:
    """
    One student, one day: fetch every connected platform concurrently,
    derive the streak, persist the day.
    """

    def __init__(
        self,
        store: SyncStore,
        adapters: Mapping[Platform, PlatformAdapter],
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.adapters = dict(adapters)
        self.clock = clock

    async def sync(self, student_id: str, today: date, yesterday: date) -> bool:
        """
        Returns False when a store error for this student was contained
        (logged, nothing half-written); True once the day is committed.
        """
        try:
            await self._sync(student_id, today, yesterday)
        except Exception:
            log.exception("Failed to sync student id=%s day=%s", student_id, today)
            return False
        return True

    async def collect_stats(
        self,
        student_id: str,
        accounts: list[AccountRecord],
    ) -> tuple[PlatformStats, list[AccountRecord]]:
        queried: list[AccountRecord] = []
        for acc in accounts:
            if acc.platform in self.adapters:
                queried.append(acc)
            else:
                log.debug("No adapter for %s, skipping account id=%s", acc.platform.value, acc.id)

        results = await asyncio.gather(
            *(self.adapters[acc.platform].fetch(acc.username) for acc in queried)
        )

        stats = PlatformStats()
        for acc, res in zip(queried, results):
            if not res.ok:
                log.info(
                    "student=%s %s counted as 0 (%s)",
                    student_id,
                    acc.platform.value,
                    res.error,
                )
            stats = stats.with_count(acc.platform, res.count)

        return stats, queried

    async def _sync(self, student_id: str, today: date, yesterday: date) -> None:
        accounts = await self.store.list_accounts(student_id)
        stats, queried = await self.collect_stats(student_id, accounts)
        synced_at = self.clock()

        prev = await self.store.get_activity(student_id, yesterday)
        current = await self.store.get_current_streak(student_id)
        streak = next_streak(
            current,
            yesterday_active=prev.is_active if prev else None,
            today_active=stats.is_active,
        )

        await self.store.commit_student_day(
            student_id=student_id,
            activity_date=today,
            stats=stats,
            streak=streak,
            synced_account_ids=[acc.id for acc in queried],
            synced_at=synced_at,
        )

        log.debug(
            "Synced student=%s total=%s active=%s streak %s -> %s",
            student_id,
            stats.total_solved,
            stats.is_active,
            current,
            streak,
        )
