# tracker/platforms/leetcode.py
from __future__ import annotations

from tracker.database.models import Platform
from tracker.platforms.base import AdapterError, PlatformAdapter, as_count, expect_object

PROFILE_QUERY = """
query getUserProfile($username: String!) {
  matchedUser(username: $username) {
    submitStats: submitStatsGlobal {
      acSubmissionNum {
        difficulty
        count
        submissions
      }
    }
  }
}
"""


class LeetCodeAdapter(PlatformAdapter):
    """Accepted-problem count from the "All" difficulty bucket of the GraphQL profile."""

    platform = Platform.LEETCODE

    async def _fetch(self, username: str) -> int:
        data = expect_object(
            await self._request_json(
                "POST",
                self.base_url,
                json={"query": PROFILE_QUERY, "variables": {"username": username}},
                headers={"Referer": "https://leetcode.com"},
            )
        )

        errors = data.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) and errors else errors
            message = first.get("message") if isinstance(first, dict) else first
            raise AdapterError(f"API error: {message}")

        user = (data.get("data") or {}).get("matchedUser")
        if not isinstance(user, dict):
            raise AdapterError("user not found")

        buckets = (user.get("submitStats") or {}).get("acSubmissionNum")
        if not isinstance(buckets, list):
            raise AdapterError("missing acSubmissionNum")

        for bucket in buckets:
            if isinstance(bucket, dict) and bucket.get("difficulty") == "All":
                return as_count(bucket.get("count"), "count")

        raise AdapterError('no "All" difficulty bucket')
