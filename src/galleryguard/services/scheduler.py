"""Cancellable scheduled tasks for overlay dwell timers."""

import asyncio
from collections.abc import Callable
from typing import Protocol


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask: ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualScheduler:
    """
    Scheduler for hosts without a running loop (e.g. a Streamlit script run).

    Nothing fires on its own; the host calls ``run_due()`` on the next
    rerun to expire overlays whose dwell has elapsed.
    """

    def __init__(self, clock: Callable[[], float]):
        self._clock = clock
        self._pending: list["_PendingTask"] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> "_PendingTask":
        task = _PendingTask(self._clock() + delay, callback)
        self._pending.append(task)
        return task

    def run_due(self) -> int:
        """Run every task whose deadline has passed. Returns the number run."""
        now = self._clock()
        due = [task for task in self._pending if not task.cancelled and task.deadline <= now]
        self._pending = [task for task in self._pending if not task.cancelled and task.deadline > now]
        for task in due:
            task.callback()
        return len(due)

    @property
    def pending(self) -> int:
        return sum(1 for task in self._pending if not task.cancelled)


class _PendingTask:
    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
