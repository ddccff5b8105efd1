# tracker/services/rate_limit.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class BatchLimiter(Protocol):
    """
    Admission control for the orchestrator: hands out groups of work items.
    The next group is only produced once the consumer asks for it, i.e. after
    the previous group has settled.
    """

    def batches(self, items: Sequence[T]) -> AsyncIterator[list[T]]: ...


class FixedWindowLimiter:
    """
    At most `batch_size` items in flight, and a fixed pause between groups.
    """

    def __init__(
        self,
        batch_size: int = 10,
        delay_seconds: float = 0.5,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def batches(self, items: Sequence[T]) -> AsyncIterator[list[T]]:
        for start in range(0, len(items), self.batch_size):
            if start and self.delay_seconds:
                await self._sleep(self.delay_seconds)
            yield list(items[start:start + self.batch_size])
