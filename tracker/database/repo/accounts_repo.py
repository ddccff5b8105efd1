from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.database.models import Platform, PlatformAccount
from tracker.database.records import AccountRecord


async def list_accounts(session: AsyncSession, student_id: str) -> list[AccountRecord]:
    res = await session.execute(
        select(PlatformAccount)
        .where(PlatformAccount.student_id == student_id)
        .order_by(PlatformAccount.platform.asc())
    )

    out: list[AccountRecord] = []
    for acc in res.scalars().all():
        out.append(
            AccountRecord(
                id=str(acc.id),
                student_id=str(acc.student_id),
                platform=Platform(acc.platform),
                username=(acc.username or "").strip(),
                last_synced_at=acc.last_synced_at,
            )
        )
    return out


async def mark_synced(session: AsyncSession, account_ids: Iterable[str], at: datetime) -> int:
    ids = list(account_ids)
    if not ids:
        return 0

    res = await session.execute(
        update(PlatformAccount).where(PlatformAccount.id.in_(ids)).values(last_synced_at=at)
    )
    return int(res.rowcount or 0)
