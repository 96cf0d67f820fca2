"""Timed cooking of a single food item."""
from __future__ import annotations

from typing import Callable, Optional

from config import COOK_PROGRESS_STEP, COOK_PROGRESS_TARGET, COOK_TICK_SECONDS
from game.entities import FoodItem, FoodState, Station
from game.timers import IntervalTimers


def start_cooking(item: FoodItem) -> bool:
    """Move an unprepared item into the preparing state."""
    if item.state is not FoodState.UNPREPARED:
        return False
    item.state = FoodState.PREPARING
    item.prep_progress = 0
    return True


class CookingProcess:
    """Advances one item's progress on a fixed cadence until it is cooked.

    The process remembers the station and the item id, never a list
    position, so removing other items from the station cannot redirect it.
    It stops itself when the item is cooked or no longer on the station.
    """

    def __init__(
        self,
        station: Station,
        item_id: str,
        timers: IntervalTimers,
        *,
        on_cooked: Optional[Callable[[FoodItem], None]] = None,
        on_vanished: Optional[Callable[[str], None]] = None,
        period: float = COOK_TICK_SECONDS,
    ) -> None:
        self.station = station
        self.item_id = item_id
        self.timers = timers
        self.period = period
        self.handle: Optional[int] = None
        self._on_cooked = on_cooked
        self._on_vanished = on_vanished

    @property
    def running(self) -> bool:
        return self.handle is not None and self.handle in self.timers

    def start(self) -> bool:
        item = self.station.get(self.item_id)
        if item is None or self.handle is not None:
            return False
        if not start_cooking(item):
            return False
        self.handle = self.timers.set_interval(self.tick, self.period)
        return True

    def stop(self) -> None:
        if self.handle is not None:
            self.timers.clear_interval(self.handle)

    def tick(self) -> None:
        if not self.running:
            return
        item = self.station.get(self.item_id)
        if item is None or item.state is not FoodState.PREPARING:
            self.stop()
            if self._on_vanished is not None:
                self._on_vanished(self.item_id)
            return

        progress = item.prep_progress or 0
        if progress < COOK_PROGRESS_TARGET:
            progress = min(COOK_PROGRESS_TARGET, progress + COOK_PROGRESS_STEP)
            item.prep_progress = progress
        if progress >= COOK_PROGRESS_TARGET:
            item.prep_progress = COOK_PROGRESS_TARGET
            item.state = FoodState.PREPARED
            self.stop()
            if self._on_cooked is not None:
                self._on_cooked(item)
