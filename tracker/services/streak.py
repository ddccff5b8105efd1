# tracker/services/streak.py
from __future__ import annotations


def next_streak(current: int, *, yesterday_active: bool | None, today_active: bool) -> int:
    """
    Consecutive-active-days counter after today's sync.

    yesterday_active is None when there is no row for yesterday.

        yesterday   today    -> new streak
        --------------------------------------
        any         inactive    0
        active      active      current + 1
        inactive    active      1
        no row      active      1
    """
    if current < 0:
        raise ValueError(f"streak must be non-negative, got {current}")

    if not today_active:
        return 0
    if yesterday_active:
        return current + 1
    return 1
