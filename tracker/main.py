# tracker/main.py
import argparse
import asyncio
import logging

from tracker.config import Settings
from tracker.database import Database

# IMPORTANT: register models
from tracker.database.models import *  # noqa: F401,F403

from tracker.logging_setup import setup_logging
from tracker.scheduler import setup_scheduler
from tracker.scheduler.jobs import daily_sync_job


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tracker",
        description="Run the daily coding-activity sync on a schedule.",
    )
    parser.add_argument(
        "--run-now",
        action="store_true",
        help="run one sync immediately at startup, then keep the schedule",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("tracker")

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized")

    scheduler = setup_scheduler(db=db, settings=settings)
    log.info(
        "Scheduler started: daily sync at %02d:%02d %s",
        settings.sync_hour,
        settings.sync_minute,
        settings.timezone,
    )

    try:
        if args.run_now:
            await daily_sync_job(db, settings)

        # block until cancelled (Ctrl+C / SIGTERM via asyncio.run)
        await asyncio.Event().wait()
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Tracker crashed")
        raise
    finally:
        # Stop scheduler
        try:
            scheduler.shutdown(wait=False)
        except Exception:
            log.exception("Failed to shutdown scheduler")

        # Close DB
        try:
            await db.close()
        except Exception:
            log.exception("Failed to close DB")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
