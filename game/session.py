"""KitchenSession: the headless core of InterChop.

The session owns both stations, the served counter and the timers that
drive cooking.  Every command and every cooking tick reads and writes the
stations in one uninterrupted step, so interleaved ticks and player actions
never lose an update.  Illegal commands are silent no-ops.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from config import EVENT_LOG_LIMIT
from game.cooking import CookingProcess
from game.entities import FoodItem, Station, StationKind, StationSnapshot
from game.timers import IntervalTimers
from game.transfer import TransferOutcome, transfer_item
from station_catalog import load_station_catalog


class KitchenSession:
    def __init__(
        self,
        station_defs: Optional[Sequence[Dict]] = None,
        timers: Optional[IntervalTimers] = None,
    ) -> None:
        defs = list(station_defs) if station_defs is not None else load_station_catalog()
        self.stations: List[Station] = [
            Station(
                kind=StationKind(str(entry["kind"])),
                chain_id=int(entry["chain_id"]),
                display_name=str(entry.get("display_name", "")),
            )
            for entry in defs
        ]
        if sorted(s.kind.value for s in self.stations) != sorted(k.value for k in StationKind):
            raise ValueError("a session needs exactly one cooking and one assembly station")
        self.timers = timers if timers is not None else IntervalTimers()
        self.served_count: int = 0
        self.event_log: List[str] = []
        self._cooking: Dict[str, CookingProcess] = {}
        self.log_event("Kitchen opened")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def time(self) -> float:
        return self.timers.now

    def station_index(self, kind: StationKind) -> int:
        for index, station in enumerate(self.stations):
            if station.kind is kind:
                return index
        raise LookupError(kind)

    def station(self, kind: StationKind) -> Station:
        return self.stations[self.station_index(kind)]

    def get_stations(self) -> Tuple[StationSnapshot, ...]:
        return tuple(station.snapshot() for station in self.stations)

    def get_served_count(self) -> int:
        return self.served_count

    def total_items(self) -> int:
        return sum(len(station) for station in self.stations)

    def is_cooking(self, item_id: str) -> bool:
        return item_id in self._cooking

    @property
    def active_cooking(self) -> int:
        return len(self._cooking)

    def log_event(self, message: str) -> None:
        self.event_log.append(message)
        self.event_log = self.event_log[-EVENT_LOG_LIMIT:]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start_assembly_action(self) -> None:
        item = self.station(StationKind.ASSEMBLY).try_add_new_item()
        if item is not None:
            self.log_event("Pizza assembled")

    def start_cooking_action(self) -> None:
        station = self.station(StationKind.COOKING)
        item = station.pick_next_unprepared()
        if item is None or self.is_cooking(item.id):
            return
        process = CookingProcess(
            station,
            item.id,
            self.timers,
            on_cooked=self._finish_cooking,
            on_vanished=self._drop_cooking,
        )
        if process.start():
            self._cooking[item.id] = process
            self.log_event("Cooking started")

    def transfer(self, station_index: int, item_index: int) -> None:
        outcome = transfer_item(self.stations, station_index, item_index)
        if outcome is TransferOutcome.SERVED:
            self.served_count += 1
            self.log_event(f"Pizza served (total {self.served_count})")
        elif outcome is TransferOutcome.MOVED:
            self.log_event("Pizza moved to cooking")

    transfer_action = transfer

    def tick(self, dt: float) -> int:
        """Advance the kitchen clock; returns the number of cooking ticks run."""
        return self.timers.advance(dt)

    # ------------------------------------------------------------------
    # Cooking callbacks
    # ------------------------------------------------------------------

    def _finish_cooking(self, item: FoodItem) -> None:
        self._cooking.pop(item.id, None)
        self.log_event("Pizza cooked")

    def _drop_cooking(self, item_id: str) -> None:
        self._cooking.pop(item_id, None)
        self.log_event("Cooking stopped: pizza left the oven")
