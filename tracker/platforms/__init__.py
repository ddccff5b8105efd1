# tracker/platforms/__init__.py
from __future__ import annotations

import aiohttp

from tracker.config.settings import Settings
from tracker.database.models import Platform

from .base import AdapterError, FetchResult, PlatformAdapter
from .codechef import CodeChefAdapter
from .codeforces import CodeforcesAdapter
from .hackerrank import HackerRankAdapter
from .leetcode import LeetCodeAdapter


def open_http_session(settings: Settings) -> aiohttp.ClientSession:
    return aiohttp.ClientSession(
        headers={
            "User-Agent": settings.http_user_agent,
            "Accept": "application/json",
        },
        timeout=aiohttp.ClientTimeout(total=settings.platform_timeout_seconds),
    )


def build_adapters(http: aiohttp.ClientSession, settings: Settings) -> dict[Platform, PlatformAdapter]:
    timeout = settings.platform_timeout_seconds
    return {
        Platform.LEETCODE: LeetCodeAdapter(http, settings.leetcode_url, timeout_seconds=timeout),
        Platform.CODECHEF: CodeChefAdapter(http, settings.codechef_url, timeout_seconds=timeout),
        Platform.CODEFORCES: CodeforcesAdapter(http, settings.codeforces_url, timeout_seconds=timeout),
        Platform.HACKERRANK: HackerRankAdapter(http, settings.hackerrank_url, timeout_seconds=timeout),
    }


__all__ = [
    "AdapterError",
    "FetchResult",
    "PlatformAdapter",
    "LeetCodeAdapter",
    "CodeChefAdapter",
    "CodeforcesAdapter",
    "HackerRankAdapter",
    "build_adapters",
    "open_http_session",
]
