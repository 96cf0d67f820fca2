"""Cooperative periodic timers driven by the simulation clock."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from config import TIMER_EPSILON


@dataclass
class _Interval:
    handle: int
    period: float
    callback: Callable[[], None]
    due: float


class IntervalTimers:
    """Deterministic replacement for wall-clock ``setInterval``.

    Nothing fires on its own: :meth:`advance` moves the clock forward and runs
    every callback that falls due, earliest first (ties in registration
    order).  Each callback runs to completion before the next one starts.
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._intervals: Dict[int, _Interval] = {}
        self._next_handle: int = 1

    def __len__(self) -> int:
        return len(self._intervals)

    def __contains__(self, handle: int) -> bool:
        return handle in self._intervals

    def set_interval(self, callback: Callable[[], None], period: float) -> int:
        if period <= 0:
            raise ValueError("interval period must be positive")
        handle = self._next_handle
        self._next_handle += 1
        self._intervals[handle] = _Interval(handle, float(period), callback, self.now + period)
        return handle

    def clear_interval(self, handle: int) -> None:
        self._intervals.pop(handle, None)

    def _next_due(self, until: float) -> _Interval | None:
        due = [iv for iv in self._intervals.values() if iv.due <= until + TIMER_EPSILON]
        if not due:
            return None
        return min(due, key=lambda iv: (iv.due, iv.handle))

    def advance(self, dt: float) -> int:
        """Move the clock by ``dt`` seconds; returns how many callbacks fired."""
        target = self.now + max(0.0, dt)
        fired = 0
        while True:
            interval = self._next_due(target)
            if interval is None:
                break
            self.now = max(self.now, interval.due)
            interval.due += interval.period
            interval.callback()
            fired += 1
        self.now = target
        return fired
