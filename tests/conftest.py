"""
Shared fixtures for the tracker test suite.

- FakeStore: in-memory SyncStore for unit tests (no database)
- FakeAdapter: scripted platform adapter with an in-flight probe
- platform_server: local aiohttp server imitating the four provider APIs
- db: SQLite file database with the schema created, for integration tests
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from tracker.config.settings import Settings
from tracker.database import Database
from tracker.database.models import Period, Platform, RankType
from tracker.database.records import AccountRecord, ActivityRecord, LeaderboardRecord, PlatformStats
from tracker.platforms.base import FetchResult

# ============================================================================
# IN-MEMORY STORE (Unit Tests)
# ============================================================================


class StoreDown(Exception):
    pass


class FakeStore:
    def __init__(self) -> None:
        self.streaks: dict[str, int] = {}
        self.accounts: dict[str, list[AccountRecord]] = {}
        self.activity: dict[tuple[str, date], ActivityRecord] = {}
        self.leaderboard: dict[tuple[str, RankType, Period], LeaderboardRecord] = {}
        self.synced_at: dict[str, datetime] = {}

        self.fail_students: set[str] = set()
        self.fail_roster = False
        self.fail_leaderboard = False
        self.commits: list[str] = []
        self.leaderboard_writes = 0

    # --- seeding helpers ---

    def add_student(
        self,
        student_id: str,
        *,
        streak: int = 0,
        accounts: dict[Platform, str] | None = None,
    ) -> None:
        self.streaks[student_id] = streak
        self.accounts[student_id] = [
            AccountRecord(
                id=f"{student_id}-{platform.value}",
                student_id=student_id,
                platform=platform,
                username=username,
            )
            for platform, username in (accounts or {}).items()
        ]

    def set_activity(self, student_id: str, day: date, stats: PlatformStats) -> None:
        self.activity[(student_id, day)] = ActivityRecord(
            student_id=student_id,
            activity_date=day,
            stats=stats,
            total_solved=stats.total_solved,
            is_active=stats.is_active,
        )

    # --- SyncStore ---

    async def list_student_ids(self) -> list[str]:
        if self.fail_roster:
            raise StoreDown("roster unavailable")
        return sorted(self.streaks)

    async def list_accounts(self, student_id: str) -> list[AccountRecord]:
        if student_id in self.fail_students:
            raise StoreDown(f"cannot read accounts for {student_id}")
        return list(self.accounts.get(student_id, []))

    async def get_activity(self, student_id: str, activity_date: date) -> ActivityRecord | None:
        return self.activity.get((student_id, activity_date))

    async def get_current_streak(self, student_id: str) -> int:
        if student_id not in self.streaks:
            raise LookupError(student_id)
        return self.streaks[student_id]

    async def commit_student_day(
        self,
        *,
        student_id: str,
        activity_date: date,
        stats: PlatformStats,
        streak: int,
        synced_account_ids: Iterable[str],
        synced_at: datetime,
    ) -> None:
        await asyncio.sleep(0)
        for account_id in synced_account_ids:
            self.synced_at[account_id] = synced_at
        self.streaks[student_id] = streak
        self.set_activity(student_id, activity_date, stats)
        self.commits.append(student_id)

    async def list_activity_for_day(self, activity_date: date) -> list[ActivityRecord]:
        rows = [a for (sid, d), a in self.activity.items() if d == activity_date]
        return sorted(rows, key=lambda a: -a.total_solved)

    async def get_streaks(self, student_ids: Iterable[str]) -> dict[str, int]:
        return {sid: self.streaks.get(sid, 0) for sid in student_ids}

    async def replace_leaderboard(
        self,
        entries: list[LeaderboardRecord],
        *,
        rank_type: RankType,
        period: Period,
        updated_at: datetime,
    ) -> None:
        if self.fail_leaderboard:
            raise StoreDown("leaderboard write failed")
        keep = {e.student_id for e in entries}
        for key in [k for k in self.leaderboard if k[1] == rank_type and k[2] == period]:
            if key[0] not in keep:
                del self.leaderboard[key]
        for e in entries:
            self.leaderboard[(e.student_id, rank_type, period)] = e
        self.leaderboard_writes += 1

    def ranking(self, rank_type: RankType = RankType.COLLEGE, period: Period = Period.DAILY):
        rows = [e for (_, rt, p), e in self.leaderboard.items() if rt == rank_type and p == period]
        return sorted(rows, key=lambda e: e.rank)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


# ============================================================================
# SCRIPTED ADAPTERS (Unit Tests)
# ============================================================================


@dataclass
class InFlightProbe:
    current: int = 0
    peak: int = 0

    def enter(self) -> None:
        self.current += 1
        self.peak = max(self.peak, self.current)

    def leave(self) -> None:
        self.current -= 1


@dataclass
class FakeAdapter:
    platform: Platform
    counts: dict[str, int] = field(default_factory=dict)
    fail_reason: str | None = None
    delay: float = 0.01
    probe: InFlightProbe | None = None
    calls: list[str] = field(default_factory=list)

    async def fetch(self, username: str) -> FetchResult:
        self.calls.append(username)
        if self.probe:
            self.probe.enter()
        try:
            await asyncio.sleep(self.delay)
        finally:
            if self.probe:
                self.probe.leave()
        if self.fail_reason:
            return FetchResult.failed(self.platform, username, self.fail_reason)
        return FetchResult.success(self.platform, username, self.counts.get(username, 0))


@pytest.fixture
def probe() -> InFlightProbe:
    return InFlightProbe()


@pytest.fixture
def adapters(probe: InFlightProbe) -> dict[Platform, FakeAdapter]:
    return {
        p: FakeAdapter(p, probe=probe)
        for p in (Platform.LEETCODE, Platform.CODECHEF, Platform.CODEFORCES, Platform.HACKERRANK)
    }


# ============================================================================
# FAKE PROVIDER HTTP SERVER (Adapter Tests)
# ============================================================================

RESPONSES = web.AppKey("responses", dict)


async def _respond(request: web.Request, key: str) -> web.StreamResponse:
    reply = request.app[RESPONSES].get(key)
    if reply is None:
        return web.json_response({"error": "not configured"}, status=404)

    status, body, delay = reply
    if delay:
        await asyncio.sleep(delay)
    if isinstance(body, (dict, list)):
        return web.json_response(body, status=status)
    return web.Response(text=body, status=status)


async def _leetcode(request: web.Request) -> web.StreamResponse:
    payload = await request.json()
    return await _respond(request, f"leetcode:{payload['variables']['username']}")


async def _codechef(request: web.Request) -> web.StreamResponse:
    return await _respond(request, f"codechef:{request.match_info['username']}")


async def _codeforces(request: web.Request) -> web.StreamResponse:
    return await _respond(request, f"codeforces:{request.query.get('handle')}")


async def _hackerrank(request: web.Request) -> web.StreamResponse:
    return await _respond(request, f"hackerrank:{request.match_info['username']}")


class PlatformServer:
    def __init__(self, server: TestServer) -> None:
        self.server = server
        self.responses: dict[str, tuple[int, object, float]] = server.app[RESPONSES]

    def reply(self, platform: str, username: str, body: object, *, status: int = 200, delay: float = 0.0) -> None:
        self.responses[f"{platform}:{username}"] = (status, body, delay)

    def settings(self, **overrides) -> Settings:
        base = dict(
            leetcode_url=str(self.server.make_url("/leetcode/graphql")),
            codechef_url=str(self.server.make_url("/codechef")),
            codeforces_url=str(self.server.make_url("/codeforces")),
            hackerrank_url=str(self.server.make_url("/hackerrank")),
            platform_timeout_seconds=2.0,
        )
        base.update(overrides)
        return Settings(**base)


@pytest_asyncio.fixture
async def platform_server() -> AsyncGenerator[PlatformServer, None]:
    app = web.Application()
    app[RESPONSES] = {}
    app.router.add_post("/leetcode/graphql", _leetcode)
    app.router.add_get("/codechef/{username}", _codechef)
    app.router.add_get("/codeforces/user.status", _codeforces)
    app.router.add_get("/hackerrank/{username}", _hackerrank)

    server = TestServer(app)
    await server.start_server()
    try:
        yield PlatformServer(server)
    finally:
        await server.close()


# ============================================================================
# DATABASE FIXTURES (Integration Tests)
# ============================================================================


@pytest_asyncio.fixture
async def db(tmp_path) -> AsyncGenerator[Database, None]:
    """
    File-backed SQLite (each syncer opens its own connection, so
    :memory: would hand every session a different empty database).
    """
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'tracker.db'}")
    await database.init_models()
    try:
        yield database
    finally:
        await database.close()
