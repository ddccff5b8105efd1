# tracker/services/daily_sync.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from tracker.config.settings import Settings
from tracker.database import Database
from tracker.platforms import build_adapters, open_http_session
from tracker.services.leaderboard import LeaderboardService
from tracker.services.rate_limit import BatchLimiter, FixedWindowLimiter
from tracker.services.store import SqlSyncStore, SyncStore
from tracker.services.student_sync import StudentSyncer
from tracker.utils.dates import TimeProvider

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncReport:
    day: date
    students: int
    synced: int
    failed: int
    ranked: int


class SyncOrchestrator:
    def __init__(
        self,
        store: SyncStore,
        syncer: StudentSyncer,
        leaderboard: LeaderboardService,
        limiter: BatchLimiter,
        *,
        time: TimeProvider | None = None,
    ) -> None:
        self.store = store
        self.syncer = syncer
        self.leaderboard = leaderboard
        self.limiter = limiter
        self.time = time or TimeProvider()

    async def run_daily_sync(self) -> SyncReport:
        """
        Sync every student in limiter-sized batches, then rank once.

        Roster load and leaderboard failures propagate (run failure);
        per-student failures are counted and the run carries on.
        """
        student_ids = await self.store.list_student_ids()

        # fixed for the whole run, a long batch must not straddle midnight
        today, yesterday = self.time.day_keys()
        log.info("Daily sync started: day=%s students=%d", today, len(student_ids))

        synced = 0
        failed = 0
        batch_no = 0

        async for batch in self.limiter.batches(student_ids):
            batch_no += 1
            results = await asyncio.gather(
                *(self.syncer.sync(sid, today, yesterday) for sid in batch),
                return_exceptions=True,
            )
            for sid, res in zip(batch, results):
                if res is True:
                    synced += 1
                    continue
                failed += 1
                if isinstance(res, BaseException):
                    log.error("Sync task crashed for student id=%s", sid, exc_info=res)

            log.debug("Batch %d settled (%d students)", batch_no, len(batch))

        try:
            ranked = await self.leaderboard.update_leaderboards(today)
        except Exception:
            log.exception("Leaderboard update failed for %s (student rows stay committed)", today)
            raise

        report = SyncReport(
            day=today,
            students=len(student_ids),
            synced=synced,
            failed=failed,
            ranked=ranked,
        )
        log.info(
            "Daily sync completed: day=%s students=%d synced=%d failed=%d ranked=%d",
            report.day,
            report.students,
            report.synced,
            report.failed,
            report.ranked,
        )
        return report


async def run_daily_sync(db: Database, settings: Settings) -> SyncReport:
    """
    Job entry point: wire the engine from settings and run it once.
    """
    store = SqlSyncStore(db)
    limiter = FixedWindowLimiter(
        batch_size=settings.sync_batch_size,
        delay_seconds=settings.sync_batch_delay_seconds,
    )

    async with open_http_session(settings) as http:
        orchestrator = SyncOrchestrator(
            store,
            StudentSyncer(store, build_adapters(http, settings)),
            LeaderboardService(store),
            limiter,
            time=TimeProvider(settings.timezone),
        )
        return await orchestrator.run_daily_sync()
