"""Bounded concurrency for page fetches."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from .config import DEFAULT_MAX_ACTIVE_PAGES

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")


class ConcurrencyGate:
    """Run awaitables with at most ``limit`` of them active at once.

    Waiting callers do not hold a slot; they are woken in arrival order as
    slots are released. A task's exception propagates to the caller after
    its slot has been released.
    """

    def __init__(self, limit: int = DEFAULT_MAX_ACTIVE_PAGES) -> None:
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.limit = limit
        self.in_flight = 0
        self.peak = 0
        self._semaphore = asyncio.Semaphore(limit)

    async def run(self, task: Callable[[], Awaitable[T]]) -> T:
        """
        Run a task once a slot is free.

        Args:
            task: Zero-argument callable returning the awaitable to run

        Returns:
            Whatever the task returns
        """
        async with self._semaphore:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
            try:
                return await task()
            finally:
                self.in_flight -= 1
