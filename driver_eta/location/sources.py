"""Location contract consumed by the tracker, plus a scripted in-memory source.

Real deployments adapt the platform location API to :class:`LocationSource`.
:class:`ScriptedLocationSource` lets tests and simulations push samples by
hand on whichever thread they like.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Callable, Dict, Iterable, Optional, Protocol

from ..errors import PermissionDenied
from ..models import Coordinate, LocationSample

LOGGER = logging.getLogger(__name__)

SampleCallback = Callable[[LocationSample], None]


class LocationSource(Protocol):
    def current_position(self) -> Optional[Coordinate]:
        """One-shot fix; ``None`` when unavailable or permission is refused."""

    def watch(
        self, min_distance_m: float, min_interval_ms: int, callback: SampleCallback
    ) -> Any:
        """Subscribe to continuous updates; may raise :class:`PermissionDenied`."""

    def cancel(self, handle: Any) -> None:
        """Release a subscription returned by :meth:`watch`."""


class ScriptedLocationSource:
    """In-memory source whose samples are pushed via :meth:`emit`."""

    def __init__(
        self,
        position: Optional[Coordinate] = None,
        *,
        permission_granted: bool = True,
    ) -> None:
        self.position = position
        self.permission_granted = permission_granted
        self._subscribers: Dict[int, SampleCallback] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.watch_requests: list[tuple[float, int]] = []

    def current_position(self) -> Optional[Coordinate]:
        if not self.permission_granted:
            LOGGER.info("Location permission denied; no current position")
            return None
        return self.position

    def watch(
        self, min_distance_m: float, min_interval_ms: int, callback: SampleCallback
    ) -> int:
        if not self.permission_granted:
            raise PermissionDenied("Permission to access location was denied")
        with self._lock:
            handle = next(self._ids)
            self._subscribers[handle] = callback
            self.watch_requests.append((min_distance_m, min_interval_ms))
        return handle

    def cancel(self, handle: Any) -> None:
        with self._lock:
            self._subscribers.pop(handle, None)

    @property
    def active_subscriptions(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def emit(self, sample: LocationSample) -> None:
        """Deliver one sample to every live subscriber on the calling thread."""

        self.position = sample.coordinate
        with self._lock:
            callbacks = list(self._subscribers.values())
        for callback in callbacks:
            callback(sample)

    def replay(self, samples: Iterable[LocationSample]) -> None:
        for sample in samples:
            self.emit(sample)


__all__ = ["LocationSource", "SampleCallback", "ScriptedLocationSource"]
