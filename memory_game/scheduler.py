"""Cancellable delayed callbacks used for resolutions and timer ticks."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Protocol

__all__ = ["ManualScheduler", "ScheduledCall", "Scheduler"]


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything able to run ``callback`` once after ``delay`` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


@dataclass(order=True, slots=True)
class _ManualCall:
    due: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler that only fires callbacks when advanced.

    Its ``now`` method doubles as the engine clock so tests and simulations
    control both timing and elapsed time.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[_ManualCall] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for call in self._queue if not call.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualCall:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        call = _ManualCall(self._now + delay, next(self._sequence), callback)
        heapq.heappush(self._queue, call)
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks in order; returns the count fired."""

        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0].due <= target:
            call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = call.due
            call.callback()
            fired += 1
        self._now = target
        return fired

    def run_pending(self) -> int:
        """Fire every callback that is due at the current time."""

        return self.advance(0.0)
