# tracker/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./tracker.db"
DEFAULT_LEETCODE_URL = "https://leetcode.com/graphql"
DEFAULT_CODECHEF_URL = "https://codechef-api.vercel.app"
DEFAULT_CODEFORCES_URL = "https://codeforces.com/api"
DEFAULT_HACKERRANK_URL = "https://www.hackerrank.com/rest/hackers"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def _to_int(value: str, key_name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid integer for {key_name}: {value!r}") from e


def _to_float(value: str, key_name: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid number for {key_name}: {value!r}") from e


def _get(env, key: str, default: str) -> str:
    return (env.get(key) or default).strip() or default


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL

    # --- sync / rate control ---
    sync_batch_size: int = 10
    sync_batch_delay_ms: int = 500
    platform_timeout_seconds: float = 10.0

    # --- scheduler / time ---
    timezone: str = "UTC"
    sync_hour: int = 0
    sync_minute: int = 30

    # --- external platforms ---
    http_user_agent: str = DEFAULT_USER_AGENT
    leetcode_url: str = DEFAULT_LEETCODE_URL
    codechef_url: str = DEFAULT_CODECHEF_URL
    codeforces_url: str = DEFAULT_CODEFORCES_URL
    hackerrank_url: str = DEFAULT_HACKERRANK_URL

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @property
    def sync_batch_delay_seconds(self) -> float:
        return self.sync_batch_delay_ms / 1000.0

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast on malformed numbers and out-of-range knobs.
        """
        load_dotenv()
        env = os.environ

        sync_batch_size = _to_int(_get(env, "SYNC_BATCH_SIZE", "10"), "SYNC_BATCH_SIZE")
        if sync_batch_size < 1:
            raise RuntimeError(f"SYNC_BATCH_SIZE must be >= 1, got {sync_batch_size}")

        sync_batch_delay_ms = _to_int(_get(env, "SYNC_BATCH_DELAY_MS", "500"), "SYNC_BATCH_DELAY_MS")
        if sync_batch_delay_ms < 0:
            raise RuntimeError(f"SYNC_BATCH_DELAY_MS must be >= 0, got {sync_batch_delay_ms}")

        platform_timeout_seconds = _to_float(
            _get(env, "PLATFORM_TIMEOUT_SECONDS", "10"), "PLATFORM_TIMEOUT_SECONDS"
        )
        if platform_timeout_seconds <= 0:
            raise RuntimeError(
                f"PLATFORM_TIMEOUT_SECONDS must be > 0, got {platform_timeout_seconds}"
            )

        sync_hour = _to_int(_get(env, "SYNC_HOUR", "0"), "SYNC_HOUR")
        sync_minute = _to_int(_get(env, "SYNC_MINUTE", "30"), "SYNC_MINUTE")
        if not (0 <= sync_hour <= 23 and 0 <= sync_minute <= 59):
            raise RuntimeError(f"Invalid sync time {sync_hour:02d}:{sync_minute:02d}")

        return cls(
            database_url=_get(env, "DATABASE_URL", DEFAULT_DATABASE_URL),
            sync_batch_size=sync_batch_size,
            sync_batch_delay_ms=sync_batch_delay_ms,
            platform_timeout_seconds=platform_timeout_seconds,
            timezone=_get(env, "TIMEZONE", "UTC"),
            sync_hour=sync_hour,
            sync_minute=sync_minute,
            http_user_agent=_get(env, "HTTP_USER_AGENT", DEFAULT_USER_AGENT),
            leetcode_url=_get(env, "LEETCODE_URL", DEFAULT_LEETCODE_URL),
            codechef_url=_get(env, "CODECHEF_URL", DEFAULT_CODECHEF_URL).rstrip("/"),
            codeforces_url=_get(env, "CODEFORCES_URL", DEFAULT_CODEFORCES_URL).rstrip("/"),
            hackerrank_url=_get(env, "HACKERRANK_URL", DEFAULT_HACKERRANK_URL).rstrip("/"),
            environment=_get(env, "ENVIRONMENT", "production"),
        )
