"""Filtered, cancellable position tracking on top of a :class:`LocationSource`."""

from __future__ import annotations

import logging
import queue
import threading
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from ..config import TRACKER_MIN_DISTANCE_M, TRACKER_MIN_INTERVAL_MS
from ..errors import PermissionDenied
from ..geo import distance_km
from ..models import Coordinate, LocationSample
from .sources import LocationSource

LOGGER = logging.getLogger(__name__)

PositionCallback = Callable[[Coordinate], None]

_END = object()


class TrackerState(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"


class TrackingHandle:
    """Lazy, non-restartable stream of the coordinates delivered by one ``start``.

    Iteration blocks until the next update and ends once the tracker stops.
    """

    def __init__(self, tracker: "LocationTracker") -> None:
        self._tracker = tracker
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def _push(self, coordinate: Coordinate) -> None:
        if not self._closed.is_set():
            self._queue.put(coordinate)

    def _close(self) -> None:
        if not self._closed.is_set():
            self._closed.set()
            self._queue.put(_END)

    def __iter__(self) -> Iterator[Coordinate]:
        return self

    def __next__(self) -> Coordinate:
        item = self._queue.get()
        if item is _END:
            # Keep the sentinel so later calls also stop.
            self._queue.put(_END)
            raise StopIteration
        return item

    def next_update(self, timeout: float | None = None) -> Optional[Coordinate]:
        """Return the next coordinate, or ``None`` on timeout or after stop."""

        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _END:
            self._queue.put(_END)
            return None
        return item

    def stop(self) -> None:
        self._tracker._stop_handle(self)

    def __enter__(self) -> "TrackingHandle":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.stop()


class LocationTracker:
    """Idle -> Tracking -> Idle wrapper around a platform position stream.

    Updates closer than ``min_distance_m`` metres or ``min_interval_ms``
    milliseconds to the last delivered one are dropped, as are samples that go
    back in time. Delivery and ``stop`` share a lock, so once ``stop``
    returns no callback is running and none will start.
    """

    def __init__(
        self,
        source: LocationSource,
        *,
        min_distance_m: float = TRACKER_MIN_DISTANCE_M,
        min_interval_ms: int = TRACKER_MIN_INTERVAL_MS,
    ) -> None:
        if min_distance_m < 0 or min_interval_ms < 0:
            raise ValueError("tracker spacing must be >= 0")
        self._source = source
        self.min_distance_m = min_distance_m
        self.min_interval_ms = min_interval_ms
        self._lock = threading.RLock()
        self._state = TrackerState.IDLE
        self._subscription: Any = None
        self._callback: Optional[PositionCallback] = None
        self._handle: Optional[TrackingHandle] = None
        self._last_sample: Optional[LocationSample] = None
        self._generation = 0

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def is_tracking(self) -> bool:
        return self._state is TrackerState.TRACKING

    def current_position(self) -> Optional[Coordinate]:
        return self._source.current_position()

    def start(self, callback: Optional[PositionCallback] = None) -> TrackingHandle:
        """Begin tracking, replacing any running subscription.

        Raises :class:`PermissionDenied` (tracker stays idle) when the source
        refuses access.
        """

        with self._lock:
            if self._state is TrackerState.TRACKING:
                LOGGER.info("Restarting location tracking; stopping previous subscription")
                self._stop_locked()
            self._generation += 1
            generation = self._generation
            handle = TrackingHandle(self)
            self._callback = callback
            self._handle = handle
            self._last_sample = None
            self._state = TrackerState.TRACKING
            try:
                self._subscription = self._source.watch(
                    self.min_distance_m,
                    self.min_interval_ms,
                    lambda sample: self._on_sample(generation, sample),
                )
            except PermissionDenied:
                self._state = TrackerState.IDLE
                self._callback = None
                self._handle = None
                handle._close()
                LOGGER.warning("Location permission denied; tracker stays idle")
                raise
            LOGGER.info(
                "Location tracking started (min %.0fm / %dms)",
                self.min_distance_m,
                self.min_interval_ms,
            )
            return handle

    def stop(self) -> None:
        """Stop tracking; a no-op when already idle."""

        with self._lock:
            if self._state is TrackerState.IDLE:
                return
            self._stop_locked()

    def _stop_handle(self, handle: TrackingHandle) -> None:
        with self._lock:
            if self._handle is handle:
                self._stop_locked()
            else:
                handle._close()

    def _stop_locked(self) -> None:
        subscription = self._subscription
        handle = self._handle
        self._state = TrackerState.IDLE
        self._subscription = None
        self._callback = None
        self._handle = None
        self._last_sample = None
        if subscription is not None:
            try:
                self._source.cancel(subscription)
            except Exception as exc:  # pragma: no cover - best-effort release
                LOGGER.warning(
                    "Failed to cancel location subscription: %s", exc, exc_info=True
                )
        if handle is not None:
            handle._close()
        LOGGER.info("Location tracking stopped")

    def _on_sample(self, generation: int, sample: LocationSample) -> None:
        with self._lock:
            if self._state is not TrackerState.TRACKING or generation != self._generation:
                return
            if not self._accept(sample):
                return
            self._last_sample = sample
            callback = self._callback
            handle = self._handle
            if callback is not None:
                callback(sample.coordinate)
            if handle is not None:
                handle._push(sample.coordinate)

    def _accept(self, sample: LocationSample) -> bool:
        last = self._last_sample
        if last is None:
            return True
        elapsed_ms = sample.timestamp_ms - last.timestamp_ms
        if elapsed_ms < 0:
            LOGGER.debug(
                "Dropping out-of-order location sample (%dms behind)", -elapsed_ms
            )
            return False
        if elapsed_ms < self.min_interval_ms:
            return False
        moved_m = distance_km(last.coordinate, sample.coordinate) * 1000.0
        return moved_m >= self.min_distance_m


__all__ = ["LocationTracker", "TrackerState", "TrackingHandle"]
