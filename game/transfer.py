"""Moving items between adjacent stations and serving them."""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from game.entities import FoodItem, FoodState, Station, StationKind


class TransferOutcome(str, Enum):
    REJECTED = "rejected"
    MOVED = "moved"
    SERVED = "served"


def next_station_index(from_index: int, station_count: int) -> int:
    return (from_index + 1) % station_count


def _can_move(source: Station, destination: Station, item: FoodItem) -> bool:
    return (
        source.kind is StationKind.ASSEMBLY
        and destination.kind is StationKind.COOKING
        and item.state is FoodState.UNPREPARED
        and destination.has_room()
    )


def transfer_item(stations: Sequence[Station], from_index: int, item_index: int) -> TransferOutcome:
    """Serve or move the item at ``stations[from_index]`` slot ``item_index``.

    Rules, first match wins:

    1. no item at that slot → rejected;
    2. a prepared item on a cooking station is removed → served;
    3. an unprepared item on an assembly station moves to the end of the next
       station when that one cooks → moved;
    4. anything else → rejected.

    A rejected transfer leaves every station untouched.
    """
    if not isinstance(from_index, int) or not (0 <= from_index < len(stations)):
        return TransferOutcome.REJECTED
    source = stations[from_index]
    item = source.item_at(item_index)
    if item is None or not item.is_movable:
        return TransferOutcome.REJECTED

    if source.kind is StationKind.COOKING and item.state is FoodState.PREPARED:
        source.remove_at(item_index)
        return TransferOutcome.SERVED

    destination = stations[next_station_index(from_index, len(stations))]
    if destination is source or not _can_move(source, destination, item):
        return TransferOutcome.REJECTED

    moved = source.remove_at(item_index)
    destination.append(moved)
    return TransferOutcome.MOVED
