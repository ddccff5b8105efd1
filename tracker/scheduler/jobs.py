# tracker/scheduler/jobs.py
from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from tracker.config.settings import Settings
from tracker.database import Database
from tracker.services.daily_sync import run_daily_sync

log = logging.getLogger(__name__)

DAILY_SYNC_JOB_ID = "daily_sync"


# -------------------------------------------------
# Main job: sync + rank
# -------------------------------------------------

async def daily_sync_job(db: Database, settings: Settings) -> None:
    """
    Scheduled wrapper. A failed run is logged and left for the next
    scheduled invocation; yesterday's results stay visible meanwhile.
    """
    try:
        await run_daily_sync(db, settings)
    except Exception:
        log.exception("Daily sync run failed")


# -------------------------------------------------
# Scheduler setup
# -------------------------------------------------

def build_scheduler(db: Database, settings: Settings) -> AsyncIOScheduler:
    """
    Creates and returns an AsyncIOScheduler with the daily sync registered.
    """
    scheduler = AsyncIOScheduler(timezone=settings.timezone)

    scheduler.add_job(
        daily_sync_job,
        trigger=CronTrigger(
            hour=settings.sync_hour,
            minute=settings.sync_minute,
            timezone=settings.timezone,
        ),
        kwargs={"db": db, "settings": settings},
        id=DAILY_SYNC_JOB_ID,
        replace_existing=True,
        coalesce=True,
        max_instances=1,
        misfire_grace_time=3600,
    )

    return scheduler
