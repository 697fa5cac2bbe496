"""ETA service.

Keeps the driver's latest position and the fixed destination, and asks the
provider chain for a fresh route whenever both are known. The tracker feeds
driver positions in; results go out through an optional listener.

Inputs are versioned: a route computed for a position or destination that
has since been replaced is returned to its caller but never stored or
published.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from ..config import DEFAULT_SPEED_KMH
from ..errors import TrackerUnavailable
from ..geo import straight_line_eta
from ..location.tracker import LocationTracker, TrackingHandle
from ..models import Coordinate, RouteResult
from ..routing.chain import RouteProviderChain
from ..utils import format_minutes

RouteListener = Callable[[RouteResult], None]


@dataclass(slots=True)
class EtaServiceConfig:
    listener: RouteListener | None = None
    straight_line_speed_kmh: float = DEFAULT_SPEED_KMH
    logger: logging.Logger | None = None


class EtaService:
    def __init__(
        self,
        chain: RouteProviderChain,
        tracker: LocationTracker | None = None,
        *,
        destination: Coordinate | None = None,
        config: EtaServiceConfig | None = None,
    ) -> None:
        self.chain = chain
        self.tracker = tracker
        self.config = config or EtaServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)
        self._destination = destination
        self._driver: Optional[Coordinate] = None
        self._latest: Optional[RouteResult] = None
        self._generation = 0
        # Tracker callbacks arrive on the source's thread. Re-entrant so a
        # listener may read the service's properties or push new input.
        self._lock = threading.RLock()

    @property
    def destination(self) -> Optional[Coordinate]:
        return self._destination

    @property
    def driver_location(self) -> Optional[Coordinate]:
        return self._driver

    @property
    def latest_route(self) -> Optional[RouteResult]:
        return self._latest

    def start(self) -> TrackingHandle:
        if self.tracker is None:
            raise TrackerUnavailable("EtaService was created without a location tracker")
        return self.tracker.start(self.update_driver_location)

    def stop(self) -> None:
        if self.tracker is not None:
            self.tracker.stop()

    def set_destination(self, destination: Coordinate) -> Optional[RouteResult]:
        with self._lock:
            self._destination = destination
            self._generation += 1
        return self.refresh()

    def update_driver_location(self, location: Coordinate) -> Optional[RouteResult]:
        with self._lock:
            self._driver = location
            self._generation += 1
        return self.refresh()

    def refresh(self) -> Optional[RouteResult]:
        """Recompute the route; ``None`` while either end is still unknown."""

        with self._lock:
            origin, destination = self._driver, self._destination
            generation = self._generation
        if origin is None or destination is None:
            self._log.debug("Route refresh skipped: driver or destination unknown")
            return None
        result = self.chain.get_route(origin, destination)
        with self._lock:
            if generation != self._generation:
                self._log.debug(
                    "Discarding route for superseded input (generation %d, now %d)",
                    generation,
                    self._generation,
                )
                return result
            self._latest = result
            self._log.info(
                "ETA %s over %.2f km (source=%s)",
                format_minutes(result.duration_min),
                result.distance_km,
                result.source.value,
            )
            # Published under the lock so listeners see routes in input order.
            if self.config.listener is not None:
                self.config.listener(result)
        return result

    def straight_line_minutes(self) -> Optional[int]:
        """Quick estimate ignoring roads, for display before a route arrives."""

        return straight_line_eta(
            self._driver, self._destination, self.config.straight_line_speed_kmh
        )


__all__ = ["EtaService", "EtaServiceConfig", "RouteListener"]
