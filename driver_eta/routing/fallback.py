"""Deterministic offline route synthesis.

Used when no remote provider answers, or when the origin is already next to
the destination. The origin is classified as north/south/east/west of the
destination and a canned waypoint template for that approach is laid between
them. The path distance and a congested fixed-speed duration are derived from
those waypoints.

Templates are stored as (delta-lat, delta-lon) offsets from the destination.
Each starts with a generic entry point that the real origin replaces and ends
on the destination itself.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Mapping, Sequence, Tuple

from ..config import (
    CONGESTION_FACTOR,
    DIRECTION_THRESHOLD_DEG,
    FALLBACK_SPEED_KMH,
    MIN_FALLBACK_MINUTES,
    NEAR_DESTINATION_KM,
)
from ..geo import distance_km, path_distance_km
from ..models import Coordinate, RouteResult, RouteSource
from ..utils import round_half_up

LOGGER = logging.getLogger(__name__)

Offset = Tuple[float, float]


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    CENTER = "center"


# Hand-tuned approaches that follow a street grid rather than the straight
# line: a main road in, a jog onto a cross street, then the final block.
ROUTE_TEMPLATES: Dict[Direction, Tuple[Offset, ...]] = {
    Direction.NORTH: (
        (0.0100, -0.0010),
        (0.0070, -0.0012),
        (0.0045, -0.0006),
        (0.0030, 0.0004),
        (0.0012, 0.0006),
        (0.0, 0.0),
    ),
    Direction.SOUTH: (
        (-0.0100, 0.0010),
        (-0.0068, 0.0013),
        (-0.0042, 0.0007),
        (-0.0025, -0.0004),
        (-0.0010, -0.0005),
        (0.0, 0.0),
    ),
    Direction.EAST: (
        (0.0008, 0.0100),
        (0.0011, 0.0072),
        (0.0005, 0.0046),
        (-0.0004, 0.0028),
        (-0.0005, 0.0011),
        (0.0, 0.0),
    ),
    Direction.WEST: (
        (-0.0008, -0.0100),
        (-0.0011, -0.0071),
        (-0.0005, -0.0044),
        (0.0004, -0.0027),
        (0.0005, -0.0010),
        (0.0, 0.0),
    ),
    Direction.CENTER: (
        (0.0020, 0.0020),
        (0.0012, 0.0016),
        (0.0006, 0.0006),
        (0.0, 0.0),
    ),
}


def classify_direction(
    origin: Coordinate,
    destination: Coordinate,
    threshold_deg: float = DIRECTION_THRESHOLD_DEG,
) -> Direction:
    """Return where the origin lies relative to the destination.

    Axes are tested independently in the fixed order north, south, east,
    west; the first match wins.
    """

    if origin.latitude > destination.latitude + threshold_deg:
        return Direction.NORTH
    if origin.latitude < destination.latitude - threshold_deg:
        return Direction.SOUTH
    if origin.longitude > destination.longitude + threshold_deg:
        return Direction.EAST
    if origin.longitude < destination.longitude - threshold_deg:
        return Direction.WEST
    return Direction.CENTER


def fallback_duration_minutes(distance: float) -> int:
    minutes = round_half_up(distance / FALLBACK_SPEED_KMH * 60.0 * CONGESTION_FACTOR)
    return max(MIN_FALLBACK_MINUTES, minutes)


class FallbackRouter:
    """Terminal link of the provider chain; never fails, never does I/O."""

    name = "fallback"
    source = RouteSource.FALLBACK

    def __init__(
        self,
        templates: Dict[Direction, Sequence[Offset]] | None = None,
        *,
        near_destination_km: float = NEAR_DESTINATION_KM,
    ) -> None:
        self._templates = dict(templates or ROUTE_TEMPLATES)
        self._near_destination_km = near_destination_km

    def is_near(self, origin: Coordinate, destination: Coordinate) -> bool:
        return distance_km(origin, destination) < self._near_destination_km

    def fetch_route(self, origin: Coordinate, destination: Coordinate) -> RouteResult:
        if self.is_near(origin, destination):
            path = [origin, destination]
            direction = None
        else:
            direction = classify_direction(origin, destination)
            waypoints = template_points(direction, destination, self._templates)
            path = [origin] + waypoints[1:]
        distance = path_distance_km(path)
        duration = fallback_duration_minutes(distance)
        LOGGER.debug(
            "Fallback route direction=%s points=%d distance=%.3fkm duration=%dmin",
            direction.value if direction else "direct",
            len(path),
            distance,
            duration,
        )
        return RouteResult(
            distance_km=distance,
            duration_min=duration,
            path=tuple(path),
            source=self.source,
        )


def _shift(anchor: Coordinate, offset: Offset) -> Coordinate:
    d_lat, d_lon = offset
    if d_lat == 0.0 and d_lon == 0.0:
        return anchor
    latitude = min(90.0, max(-90.0, anchor.latitude + d_lat))
    longitude = anchor.longitude + d_lon
    # Wrap across the antimeridian.
    if longitude > 180.0:
        longitude -= 360.0
    elif longitude < -180.0:
        longitude += 360.0
    return Coordinate(latitude, longitude)


def template_points(
    direction: Direction,
    destination: Coordinate,
    templates: Mapping[Direction, Sequence[Offset]] = ROUTE_TEMPLATES,
) -> List[Coordinate]:
    """Return the absolute waypoints of a template anchored on ``destination``.

    Directions missing from ``templates`` use the center template.
    """

    offsets = templates.get(direction) or templates[Direction.CENTER]
    return [_shift(destination, offset) for offset in offsets]


__all__ = [
    "Direction",
    "FallbackRouter",
    "ROUTE_TEMPLATES",
    "classify_direction",
    "fallback_duration_minutes",
    "template_points",
]
