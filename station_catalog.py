from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

from config import ASSEMBLY, COOKING, DEFAULT_STATION_CHAINS, STATION_KINDS, STATIONS_FILE


@dataclass(frozen=True)
class StationDefinition:
    kind: str
    chain_id: int
    display_name: str

    def to_runtime_dict(self) -> Dict[str, str | int]:
        return {
            "kind": self.kind,
            "chain_id": self.chain_id,
            "display_name": self.display_name,
        }


DEFAULT_STATIONS: Dict[str, StationDefinition] = {
    COOKING: StationDefinition(COOKING, DEFAULT_STATION_CHAINS[COOKING], "Cooking"),
    ASSEMBLY: StationDefinition(ASSEMBLY, DEFAULT_STATION_CHAINS[ASSEMBLY], "Assembly"),
}


def _is_positive_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) and value > 0


def _parse_station_entry(kind: str, entry: Dict[str, Any]) -> StationDefinition | None:
    if kind not in STATION_KINDS:
        return None

    chain_id = entry.get("chain_id")
    display_name = entry.get("display_name", kind.title())

    if not _is_positive_int(chain_id):
        return None
    if not isinstance(display_name, str) or not display_name.strip():
        return None

    return StationDefinition(kind=kind, chain_id=chain_id, display_name=display_name.strip())


def _runtime_catalog(stations: Iterable[StationDefinition]) -> List[Dict[str, str | int]]:
    return [station.to_runtime_dict() for station in stations]


def _is_complete_pairing(stations: Dict[str, StationDefinition]) -> bool:
    if set(stations) != set(STATION_KINDS):
        return False
    chain_ids = [station.chain_id for station in stations.values()]
    return len(set(chain_ids)) == len(chain_ids)


def load_station_catalog(path: Path = STATIONS_FILE) -> List[Dict[str, str | int]]:
    """Station layout in session order.

    The file is a JSON object keyed by station kind.  Anything short of one
    valid cooking and one valid assembly entry on distinct chains falls back
    to :data:`DEFAULT_STATIONS`.
    """
    defaults = _runtime_catalog(DEFAULT_STATIONS.values())
    if not path.exists():
        return defaults

    try:
        raw = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return defaults

    if not isinstance(raw, dict):
        return defaults

    parsed: Dict[str, StationDefinition] = {}
    for kind, entry in raw.items():
        if not isinstance(entry, dict):
            return defaults
        station = _parse_station_entry(kind, entry)
        if station is None:
            return defaults
        parsed[kind] = station

    if not _is_complete_pairing(parsed):
        return defaults

    return _runtime_catalog(parsed.values())
