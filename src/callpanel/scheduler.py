"""Cancelable delayed tasks.

Controllers never hold raw timer handles. They ask a ``Scheduler`` for a
``ScheduledTask`` and keep it so they can cancel it on teardown or when a
state change makes it stale. ``ManualScheduler`` runs on a virtual clock for
tests and the headless demo; ``TkScheduler`` wraps tkinter's ``after``.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger("callpanel")


class ScheduledTask:
    def __init__(self, callback: Callable[[], None], due: float) -> None:
        self._callback = callback
        self.due = due
        self.cancelled = False
        self.fired = False
        self._on_cancel: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        if not self.pending:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()

    def run(self) -> None:
        if not self.pending:
            return
        self.fired = True
        self._callback()


class Scheduler:
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError

    def now(self) -> float:
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """Virtual clock; tasks fire only from ``advance``."""

    def __init__(self, start: float = 0.0) -> None:
        self._clock = start
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._clock

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback, self._clock + max(0.0, delay))
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, task in self._queue if task.pending)

    def advance(self, seconds: float) -> int:
        target = self._clock + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self._clock = max(self._clock, due)
            if task.pending:
                task.run()
                fired += 1
        self._clock = target
        return fired


class TkScheduler(Scheduler):
    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback, self.now() + delay)
        job = self._widget.after(max(0, int(delay * 1000)), task.run)

        def _cancel() -> None:
            try:
                self._widget.after_cancel(job)
            except Exception as exc:  # pragma: no cover - widget already destroyed
                logger.debug("after_cancel failed: %s", exc)

        task._on_cancel = _cancel
        return task
