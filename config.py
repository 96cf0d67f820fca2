"""Centralised configuration constants for InterChop."""
from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# Window / display
# ---------------------------------------------------------------------------
WINDOW_W: int = 960
WINDOW_H: int = 640
PANEL_MARGIN: int = 20
HEADER_H: int = 90
FOOTER_H: int = 120
ITEM_ROW_H: int = 44

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
STATIONS_FILE: Path = Path("data/stations.json")

# ---------------------------------------------------------------------------
# Station kind constants
# ---------------------------------------------------------------------------
COOKING: str = "cooking"
ASSEMBLY: str = "assembly"

STATION_KINDS: list[str] = [COOKING, ASSEMBLY]

# Default backing-resource ids, one per station kind, in station order.
DEFAULT_STATION_CHAINS: dict[str, int] = {
    COOKING: 901,
    ASSEMBLY: 902,
}

# ---------------------------------------------------------------------------
# Food item state constants
# ---------------------------------------------------------------------------
UNPREPARED: str = "unprepared"
PREPARING: str = "preparing"
PREPARED: str = "prepared"

# ---------------------------------------------------------------------------
# Cooking process tuning
# ---------------------------------------------------------------------------
COOK_TICK_SECONDS: float = 1.0      # seconds between cooking ticks
COOK_PROGRESS_STEP: int = 20        # progress added per tick
COOK_PROGRESS_TARGET: int = 100     # progress at which an item is cooked

# ---------------------------------------------------------------------------
# Station capacity (None = unbounded)
# ---------------------------------------------------------------------------
ASSEMBLY_CAPACITY: int = 1

# ---------------------------------------------------------------------------
# Session bookkeeping
# ---------------------------------------------------------------------------
EVENT_LOG_LIMIT: int = 12
TIMER_EPSILON: float = 1e-9         # absorbs float drift when dt is fractional

# ---------------------------------------------------------------------------
# Provisioning collaborator / presentation
# ---------------------------------------------------------------------------
DEPLOY_SECONDS: float = 1.5         # simulated time for a station deployment
COPY_FEEDBACK_SECONDS: float = 1.0  # how long the "copied" tick stays visible
ADDRESS_HEAD: int = 6
ADDRESS_TAIL: int = 4
