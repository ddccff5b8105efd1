# tracker/database/records.py
"""
Typed rows handed across the store boundary.

ORM objects never leave the repo layer; everything above it works on
these frozen records, so coercion of stored values happens in one place.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime

from tracker.database.models import Period, Platform, RankType

# platforms that contribute to the daily stat vector (github is tracked, not counted)
COUNTED_PLATFORMS: tuple[Platform, ...] = (
    Platform.LEETCODE,
    Platform.CODECHEF,
    Platform.CODEFORCES,
    Platform.HACKERRANK,
)


@dataclass(frozen=True, slots=True)
class PlatformStats:
    leetcode: int = 0
    codechef: int = 0
    codeforces: int = 0
    hackerrank: int = 0

    @property
    def total_solved(self) -> int:
        return self.leetcode + self.codechef + self.codeforces + self.hackerrank

    @property
    def is_active(self) -> bool:
        return self.total_solved > 0

    def with_count(self, platform: Platform, count: int) -> "PlatformStats":
        if platform not in COUNTED_PLATFORMS:
            raise ValueError(f"{platform.value} does not contribute to daily stats")
        return replace(self, **{platform.value: int(count)})

    def as_columns(self) -> dict[str, int | bool]:
        return {
            "leetcode_solved": self.leetcode,
            "codechef_solved": self.codechef,
            "codeforces_solved": self.codeforces,
            "hackerrank_solved": self.hackerrank,
            "total_solved": self.total_solved,
            "is_active": self.is_active,
        }


@dataclass(frozen=True, slots=True)
class StudentRecord:
    id: str
    current_streak: int


@dataclass(frozen=True, slots=True)
class AccountRecord:
    id: str
    student_id: str
    platform: Platform
    username: str
    last_synced_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ActivityRecord:
    student_id: str
    activity_date: date
    stats: PlatformStats
    total_solved: int
    is_active: bool


@dataclass(frozen=True, slots=True)
class LeaderboardRecord:
    student_id: str
    rank: int
    total_solved: int
    streak: int
    rank_type: RankType = RankType.COLLEGE
    period: Period = Period.DAILY
