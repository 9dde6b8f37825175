#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the cooperative render queue."""

import asyncio

import pytest

from mdcard.exceptions import RenderingError
from mdcard.rendering.scheduling import RenderQueue


@pytest.mark.unit
class TestRenderQueue:
    """Test ordering, failure isolation and host yielding."""

    def test_priority_order(self) -> None:
        """Test that higher priorities run first."""
        ran: list[str] = []
        queue = RenderQueue()
        queue.add(lambda: ran.append("answer"), priority=1)
        queue.add(lambda: ran.append("watermark"), priority=0)
        queue.add(lambda: ran.append("chrome"), priority=3)
        queue.add(lambda: ran.append("question"), priority=2)

        assert asyncio.run(queue.drain()) == 4
        assert ran == ["chrome", "question", "answer", "watermark"]
        assert len(queue) == 0

    def test_equal_priorities_run_in_insertion_order(self) -> None:
        """Test FIFO ordering within a priority."""
        ran: list[int] = []
        queue = RenderQueue()
        for index in range(5):
            queue.add(lambda index=index: ran.append(index), priority=1)
        asyncio.run(queue.drain())
        assert ran == [0, 1, 2, 3, 4]

    def test_failing_task_does_not_stop_the_drain(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a raising task is logged and recorded."""
        ran: list[str] = []

        def explode() -> None:
            raise ValueError("bad paint")

        queue = RenderQueue()
        queue.add(explode, priority=2, name="question")
        queue.add(lambda: ran.append("answer"), priority=1, name="answer")

        assert asyncio.run(queue.drain()) == 2
        assert ran == ["answer"]
        assert queue.failed == ["question"]
        assert "Render task 'question' failed" in caplog.text

    def test_failures_reset_between_drains(self) -> None:
        """Test that each drain reports only its own failures."""
        queue = RenderQueue()
        queue.add(lambda: 1 / 0, name="broken")
        asyncio.run(queue.drain())
        queue.add(lambda: None, name="fine")
        asyncio.run(queue.drain())
        assert queue.failed == []

    def test_yields_after_every_task(self) -> None:
        """Test that the host callback runs once per task."""
        yields: list[int] = []

        async def yield_to_host() -> None:
            yields.append(1)

        queue = RenderQueue(yield_to_host)
        for _ in range(3):
            queue.add(lambda: None)
        asyncio.run(queue.drain())
        assert len(yields) == 3

    def test_awaitable_tasks(self) -> None:
        """Test that coroutine results are awaited before the next task."""
        ran: list[str] = []

        async def slow() -> None:
            await asyncio.sleep(0)
            ran.append("slow")

        queue = RenderQueue()
        queue.add(slow, priority=2)
        queue.add(lambda: ran.append("fast"), priority=1)
        asyncio.run(queue.drain())
        assert ran == ["slow", "fast"]

    def test_tasks_added_while_draining(self) -> None:
        """Test that tasks queued by a running task are picked up in priority order."""
        ran: list[str] = []
        queue = RenderQueue()

        def first() -> None:
            ran.append("first")
            queue.add(lambda: ran.append("urgent"), priority=5)

        queue.add(first, priority=3)
        queue.add(lambda: ran.append("later"), priority=1)
        asyncio.run(queue.drain())
        assert ran == ["first", "urgent", "later"]

    def test_second_consumer_is_rejected(self) -> None:
        """Test that only one drain runs at a time."""
        queue = RenderQueue()
        errors: list[Exception] = []

        async def nested_drain() -> None:
            assert queue.is_draining
            try:
                await queue.drain()
            except RenderingError as e:
                errors.append(e)

        queue.add(nested_drain)
        asyncio.run(queue.drain())
        assert len(errors) == 1
        assert errors[0].rendering_stage == "scheduling"
        assert not queue.is_draining

    def test_clear(self) -> None:
        """Test dropping pending tasks."""
        queue = RenderQueue()
        queue.add(lambda: None)
        queue.clear()
        assert asyncio.run(queue.drain()) == 0
