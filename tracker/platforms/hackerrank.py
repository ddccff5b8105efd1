# tracker/platforms/hackerrank.py
from __future__ import annotations

from urllib.parse import quote

from tracker.database.models import Platform
from tracker.platforms.base import AdapterError, PlatformAdapter, expect_object


class HackerRankAdapter(PlatformAdapter):
    """
    HackerRank exposes no solved count publicly; the number of profile
    badges stands in as an approximate activity signal.
    """

    platform = Platform.HACKERRANK

    async def _fetch(self, username: str) -> int:
        data = expect_object(
            await self._request_json("GET", f"{self.base_url}/{quote(username, safe='')}")
        )
        badges = data.get("badges")
        if not isinstance(badges, list):
            raise AdapterError("missing badges list")
        return len(badges)
