"""InterChop game package.

Public API:
    from game import KitchenSession, Station, FoodItem, LocalProvisioner
"""
from game.entities import FoodItem, FoodState, Station, StationKind, StationSnapshot
from game.readiness import LocalProvisioner, ProvisioningError, ReadinessOracle
from game.session import KitchenSession

__all__ = [
    "FoodItem",
    "FoodState",
    "KitchenSession",
    "LocalProvisioner",
    "ProvisioningError",
    "ReadinessOracle",
    "Station",
    "StationKind",
    "StationSnapshot",
]
