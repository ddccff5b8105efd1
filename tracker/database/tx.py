# tracker/database/tx.py
from __future__ import annotations

from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession


@asynccontextmanager
async def committing(session: AsyncSession):
    """
    Commit everything done inside the block as one unit.

    - If reads already autobegan a transaction, reuse it and commit/rollback it here
    - Otherwise, start a new transaction
    """
    if not session.in_transaction():
        async with session.begin():
            yield
        return

    try:
        yield
    except BaseException:
        await session.rollback()
        raise
    await session.commit()
