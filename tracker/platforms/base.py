# tracker/platforms/base.py
"""
Platform adapters: one numeric activity signal per username.

An adapter never raises to its caller. Transport failures, timeouts,
non-2xx statuses, non-JSON bodies and missing fields all come back as
``FetchResult.failed(...)`` with a count of 0, and are logged as a warning
naming the platform, the username and the cause. A provider outage then
costs that platform's count for the day and nothing else.

No retries happen here.
"""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from tracker.database.models import Platform

log = logging.getLogger(__name__)


class AdapterError(Exception):
    """Response arrived but cannot be turned into a count."""


@dataclass(frozen=True, slots=True)
class FetchResult:
    platform: Platform
    username: str
    count: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, platform: Platform, username: str, count: int) -> "FetchResult":
        return cls(platform=platform, username=username, count=count)

    @classmethod
    def failed(cls, platform: Platform, username: str, reason: str) -> "FetchResult":
        return cls(platform=platform, username=username, count=0, error=reason)


def as_count(value: Any, field: str) -> int:
    """
    Accepts non-negative ints (or digit strings, some providers quote numbers).
    """
    if isinstance(value, bool):
        raise AdapterError(f"field {field!r} is a boolean")
    if isinstance(value, int):
        n = value
    elif isinstance(value, str) and value.strip().isdigit():
        n = int(value.strip())
    else:
        raise AdapterError(f"field {field!r} is not a count: {value!r}")
    if n < 0:
        raise AdapterError(f"field {field!r} is negative: {n}")
    return n


def expect_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise AdapterError(f"expected a JSON object, got {type(data).__name__}")
    return data


class PlatformAdapter:
    platform: Platform

    def __init__(
        self,
        http: aiohttp.ClientSession,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def fetch(self, username: str) -> FetchResult:
        username = (username or "").strip()
        if not username:
            return self._fail(username, "empty username")

        try:
            count = await self._fetch(username)
        except asyncio.TimeoutError:
            return self._fail(username, f"timed out after {self.timeout.total}s")
        except aiohttp.ClientError as e:
            return self._fail(username, f"transport error: {e.__class__.__name__}: {e}")
        except AdapterError as e:
            return self._fail(username, str(e))
        except Exception as e:  # never raise to the syncer
            log.debug("%s adapter crashed for %r", self.platform.value, username, exc_info=True)
            return self._fail(username, f"unexpected error: {e.__class__.__name__}: {e}")

        return FetchResult.success(self.platform, username, count)

    async def fetch_count(self, username: str) -> int:
        return (await self.fetch(username)).count

    async def _fetch(self, username: str) -> int:
        raise NotImplementedError

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        async with self.http.request(method, url, timeout=self.timeout, **kwargs) as resp:
            body = await resp.read()
            if not 200 <= resp.status < 300:
                raise AdapterError(f"HTTP {resp.status}")

        try:
            return json.loads(body)
        except ValueError as e:
            snippet = body[:60].decode("utf-8", errors="replace")
            raise AdapterError(f"non-JSON body: {snippet!r}") from e

    def _fail(self, username: str, reason: str) -> FetchResult:
        log.warning(
            "%s fetch failed for username=%r: %s",
            self.platform.value,
            username,
            reason,
        )
        return FetchResult.failed(self.platform, username, reason)
