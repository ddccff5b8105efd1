# tracker/platforms/codeforces.py
from __future__ import annotations

from tracker.database.models import Platform
from tracker.platforms.base import AdapterError, PlatformAdapter, expect_object

ACCEPTED = "OK"


def count_solved(submissions: list) -> int:
    """
    Distinct (contest, problem index) pairs with an accepted verdict.
    Re-submitting a solved problem does not count twice.
    """
    solved: set[tuple[object, str]] = set()
    for sub in submissions:
        if not isinstance(sub, dict) or sub.get("verdict") != ACCEPTED:
            continue
        problem = sub.get("problem")
        if not isinstance(problem, dict) or not problem.get("index"):
            continue
        # problemset-only problems carry no contestId
        contest = problem.get("contestId") or problem.get("problemsetName") or problem.get("name")
        solved.add((contest, str(problem["index"])))
    return len(solved)


class CodeforcesAdapter(PlatformAdapter):
    platform = Platform.CODEFORCES

    async def _fetch(self, username: str) -> int:
        data = expect_object(
            await self._request_json(
                "GET",
                f"{self.base_url}/user.status",
                params={"handle": username},
            )
        )
        if data.get("status") != "OK":
            raise AdapterError(f"API status {data.get('status')!r}: {data.get('comment')}")

        result = data.get("result")
        if not isinstance(result, list):
            raise AdapterError("missing result list")
        return count_solved(result)
