"""Readiness of each station's backing resource.

The kitchen core never consults this module; the presentation layer asks
the oracle before offering station actions and re-queries it from the
notify-on-ready callback once a deployment finishes.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from config import ADDRESS_HEAD, ADDRESS_TAIL, DEPLOY_SECONDS, TIMER_EPSILON


class ProvisioningError(RuntimeError):
    """A station's backing resource could not be deployed."""


@dataclass
class StationResource:
    is_ready: bool = False
    address: Optional[str] = None


@dataclass
class _PendingDeploy:
    remaining: float
    on_ready: Optional[Callable[[], None]] = None


class ReadinessOracle:
    def is_ready(self, station_id: int) -> bool:
        raise NotImplementedError

    def ready_resource_handle(self, station_id: int) -> Optional[str]:
        raise NotImplementedError


def resource_address(station_id: int) -> str:
    digest = hashlib.sha256(f"interchop-station:{station_id}".encode()).hexdigest()
    return "0x" + digest[:40]


def shorten_address(address: str) -> str:
    if len(address) <= ADDRESS_HEAD + ADDRESS_TAIL:
        return address
    return f"{address[:ADDRESS_HEAD]}...{address[-ADDRESS_TAIL:]}"


class LocalProvisioner(ReadinessOracle):
    """In-process stand-in for a deployment backend.

    :meth:`deploy` queues a deployment that completes after ``deploy_seconds``
    of :meth:`tick`; completion records the resource address and calls the
    caller's ``on_ready`` hook.  Station ids listed in ``failing`` refuse to
    deploy.
    """

    def __init__(self, deploy_seconds: float = DEPLOY_SECONDS, failing: Iterable[int] = ()) -> None:
        self.deploy_seconds = max(0.0, float(deploy_seconds))
        self.failing = set(failing)
        self._resources: Dict[int, StationResource] = {}
        self._pending: Dict[int, _PendingDeploy] = {}

    def is_ready(self, station_id: int) -> bool:
        return self._resources.get(station_id, StationResource()).is_ready

    def ready_resource_handle(self, station_id: int) -> Optional[str]:
        resource = self._resources.get(station_id)
        if resource is None or not resource.is_ready:
            return None
        return resource.address

    def is_deploying(self, station_id: int) -> bool:
        return station_id in self._pending

    def deploy(self, station_id: int, on_ready: Optional[Callable[[], None]] = None) -> bool:
        if self.is_ready(station_id) or self.is_deploying(station_id):
            return False
        if station_id in self.failing:
            raise ProvisioningError(f"deployment rejected on chain {station_id}")
        self._pending[station_id] = _PendingDeploy(self.deploy_seconds, on_ready)
        if self.deploy_seconds == 0.0:
            self.tick(0.0)
        return True

    def tick(self, dt: float) -> None:
        finished = []
        for station_id, pending in self._pending.items():
            pending.remaining -= dt
            if pending.remaining <= TIMER_EPSILON:
                finished.append(station_id)
        for station_id in finished:
            pending = self._pending.pop(station_id)
            self._resources[station_id] = StationResource(True, resource_address(station_id))
            if pending.on_ready is not None:
                pending.on_ready()
