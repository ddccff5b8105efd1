# tracker/database/upsert.py
from __future__ import annotations

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(session: AsyncSession, model):
    """
    INSERT construct that supports ON CONFLICT DO UPDATE for the bound dialect.
    """
    name = session.get_bind().dialect.name
    if name == "sqlite":
        return sqlite_insert(model)
    if name == "postgresql":
        return pg_insert(model)
    raise RuntimeError(f"Upsert is not supported for dialect {name!r}")
