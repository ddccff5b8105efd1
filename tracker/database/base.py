# tracker/database/base.py
from __future__ import annotations

import uuid

from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


def enum_values(enum_cls) -> list[str]:
    # store "leetcode", not "LEETCODE"; the tables are shared with other readers
    return [m.value for m in enum_cls]
