"""Core dataclasses for the InterChop kitchen."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from config import (
    ASSEMBLY,
    ASSEMBLY_CAPACITY,
    COOKING,
    PREPARED,
    PREPARING,
    UNPREPARED,
)


class FoodState(str, Enum):
    """Lifecycle of a food item: unprepared → preparing → prepared."""

    UNPREPARED = UNPREPARED
    PREPARING = PREPARING
    PREPARED = PREPARED


class StationKind(str, Enum):
    COOKING = COOKING
    ASSEMBLY = ASSEMBLY


def station_capacity(kind: StationKind) -> Optional[int]:
    """Maximum number of items a station of ``kind`` may hold (None = unbounded)."""
    if kind is StationKind.ASSEMBLY:
        return ASSEMBLY_CAPACITY
    if kind is StationKind.COOKING:
        return None
    raise ValueError(f"unknown station kind: {kind!r}")


def _new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass
class FoodItem:
    """A single pizza moving through the kitchen.

    ``prep_progress`` is ``None`` until cooking starts, runs 0..100 while the
    item is ``PREPARING`` and stays at 100 once it is ``PREPARED``.
    """

    id: str = field(default_factory=_new_item_id)
    state: FoodState = FoodState.UNPREPARED
    prep_progress: Optional[int] = None

    @property
    def is_movable(self) -> bool:
        return self.state is not FoodState.PREPARING


@dataclass(frozen=True)
class StationSnapshot:
    """Read-only view of a station handed to the presentation layer."""

    kind: StationKind
    chain_id: int
    display_name: str
    items: Tuple[FoodItem, ...]


@dataclass
class Station:
    """A bounded container of food items.

    Items are keyed by id so anything holding an id keeps resolving the same
    item when earlier items leave; dict order is arrival order.
    """

    kind: StationKind
    chain_id: int
    display_name: str = ""
    _items: Dict[str, FoodItem] = field(default_factory=dict, repr=False)

    @property
    def items(self) -> List[FoodItem]:
        return list(self._items.values())

    @property
    def capacity(self) -> Optional[int]:
        return station_capacity(self.kind)

    def __len__(self) -> int:
        return len(self._items)

    def has_room(self) -> bool:
        capacity = self.capacity
        return capacity is None or len(self._items) < capacity

    def get(self, item_id: str) -> Optional[FoodItem]:
        return self._items.get(item_id)

    def item_at(self, index: int) -> Optional[FoodItem]:
        if not isinstance(index, int) or not (0 <= index < len(self._items)):
            return None
        return self.items[index]

    def append(self, item: FoodItem) -> bool:
        if item.id in self._items or not self.has_room():
            return False
        self._items[item.id] = item
        return True

    def remove_at(self, index: int) -> Optional[FoodItem]:
        item = self.item_at(index)
        if item is None:
            return None
        return self._items.pop(item.id)

    def try_add_new_item(self) -> Optional[FoodItem]:
        """Create a raw item on an empty assembly station; otherwise do nothing."""
        if self.kind is not StationKind.ASSEMBLY or self._items:
            return None
        item = FoodItem()
        self._items[item.id] = item
        return item

    def pick_next_unprepared(self) -> Optional[FoodItem]:
        if self.kind is not StationKind.COOKING:
            return None
        for item in self._items.values():
            if item.state is FoodState.UNPREPARED:
                return item
        return None

    def snapshot(self) -> StationSnapshot:
        return StationSnapshot(
            kind=self.kind,
            chain_id=self.chain_id,
            display_name=self.display_name,
            items=tuple(replace(item) for item in self._items.values()),
        )
