#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/scheduling.py
"""Cooperative priority queue for paint tasks.

Paint steps are queued with a priority and executed one at a time by a
single ``drain()`` consumer. Between tasks the queue awaits an injected
``yield_to_host`` callback so a host event loop (or UI thread) gets a turn.
Higher priorities run first; equal priorities run in insertion order.

"""

from __future__ import annotations

import asyncio
import heapq
import inspect
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from mdcard.exceptions import RenderingError

logger = logging.getLogger(__name__)

RenderTask = Callable[[], Any]
YieldToHost = Callable[[], Awaitable[None]]


async def _next_tick() -> None:
    await asyncio.sleep(0)


@dataclass(order=True)
class _QueuedTask:
    sort_key: tuple[int, int]
    name: str = field(compare=False)
    task: RenderTask = field(compare=False)


class RenderQueue:
    """Priority queue of paint tasks with a single cooperative consumer.

    Parameters
    ----------
    yield_to_host : callable, optional
        Coroutine function awaited after every task. Defaults to
        ``asyncio.sleep(0)``.

    Examples
    --------
        >>> queue = RenderQueue()
        >>> queue.add(lambda: print("background"), priority=3)
        >>> queue.add(lambda: print("content"), priority=1)
        >>> asyncio.run(queue.drain())
        background
        content
        2

    """

    def __init__(self, yield_to_host: Optional[YieldToHost] = None):
        """Create an empty queue."""
        self._heap: list[_QueuedTask] = []
        self._counter = itertools.count()
        self._yield_to_host: YieldToHost = yield_to_host or _next_tick
        self._draining = False
        self.failed: list[str] = []

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def is_draining(self) -> bool:
        """Whether ``drain()`` is currently running."""
        return self._draining

    def add(self, task: RenderTask, priority: int = 0, name: Optional[str] = None) -> None:
        """Queue a task.

        Parameters
        ----------
        task : callable
            Zero-argument callable; may return an awaitable
        priority : int, default 0
            Higher runs first
        name : str, optional
            Label used in diagnostics

        """
        sequence = next(self._counter)
        heapq.heappush(self._heap, _QueuedTask((-priority, sequence), name or f"task-{sequence}", task))

    def clear(self) -> None:
        """Drop every pending task."""
        self._heap.clear()

    async def drain(self) -> int:
        """Run queued tasks until the queue is empty.

        Tasks queued while draining are picked up in priority order. A task
        that raises is logged and recorded in ``failed``; the remaining tasks
        still run.

        Returns
        -------
        int
            Number of tasks executed, failed ones included

        Raises
        ------
        RenderingError
            If another ``drain()`` is already running

        """
        if self._draining:
            raise RenderingError("Render queue is already being drained", rendering_stage="scheduling")

        self._draining = True
        self.failed = []
        executed = 0
        try:
            while self._heap:
                queued = heapq.heappop(self._heap)
                executed += 1
                try:
                    result = queued.task()
                    if inspect.isawaitable(result):
                        await result
                except Exception:
                    logger.exception("Render task %r failed", queued.name)
                    self.failed.append(queued.name)
                await self._yield_to_host()
        finally:
            self._draining = False

        return executed
