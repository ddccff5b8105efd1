# tracker/platforms/codechef.py
from __future__ import annotations

from urllib.parse import quote

from tracker.database.models import Platform
from tracker.platforms.base import AdapterError, PlatformAdapter, as_count, expect_object


class CodeChefAdapter(PlatformAdapter):
    platform = Platform.CODECHEF

    async def _fetch(self, username: str) -> int:
        data = expect_object(
            await self._request_json("GET", f"{self.base_url}/{quote(username, safe='')}")
        )
        if data.get("success") is False:
            raise AdapterError(f"API reported failure: {data.get('message') or data.get('error')}")
        if "totalSolved" not in data:
            raise AdapterError("missing totalSolved")
        return as_count(data["totalSolved"], "totalSolved")
