from .student import Student
from .platform_account import Platform, PlatformAccount
from .daily_activity import DailyActivity
from .leaderboard import LeaderboardEntry, Period, RankType

__all__ = [
    "Student",
    "Platform",
    "PlatformAccount",
    "DailyActivity",
    "LeaderboardEntry",
    "Period",
    "RankType",
]
