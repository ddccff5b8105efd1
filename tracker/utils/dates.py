# tracker/utils/dates.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    # naive UTC: every DateTime column is timezone=False
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True, slots=True)
class TimeProvider:
    timezone: str = "UTC"

    def today(self) -> date:
        tz = ZoneInfo(self.timezone)
        return datetime.now(tz=tz).date()

    def day_keys(self) -> tuple[date, date]:
        """(today, yesterday) in the configured timezone."""
        today = self.today()
        return today, today - timedelta(days=1)
