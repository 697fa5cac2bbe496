"""Great-circle distance and speed-based ETA helpers."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from .config import DEFAULT_SPEED_KMH, EARTH_RADIUS_KM
from .errors import InvalidSpeed
from .models import Coordinate
from .utils import round_half_up


def deg_to_rad(deg: float) -> float:
    return deg * (math.pi / 180.0)


def rad_to_deg(rad: float) -> float:
    return rad * (180.0 / math.pi)


def distance_km(first: Coordinate, second: Coordinate) -> float:
    """Return the haversine distance between two coordinates in kilometres."""

    if first == second:
        return 0.0
    sin = math.sin
    cos = math.cos
    atan2 = math.atan2
    sqrt = math.sqrt
    lat1_rad = deg_to_rad(first.latitude)
    lat2_rad = deg_to_rad(second.latitude)
    delta_lat = lat2_rad - lat1_rad
    delta_lon = deg_to_rad(second.longitude - first.longitude)
    sin_half_lat = sin(delta_lat / 2.0)
    sin_half_lon = sin(delta_lon / 2.0)
    a = sin_half_lat**2 + cos(lat1_rad) * cos(lat2_rad) * sin_half_lon**2
    c = 2.0 * atan2(sqrt(a), sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c


def path_distance_km(points: Sequence[Coordinate]) -> float:
    """Sum the leg distances along an ordered path."""

    if len(points) < 2:
        return 0.0
    total = 0.0
    previous = points[0]
    for current in points[1:]:
        total += distance_km(previous, current)
        previous = current
    return total


def eta_minutes(distance: float, speed_kmh: float = DEFAULT_SPEED_KMH) -> int:
    """Return the travel time in whole minutes for ``distance`` km at ``speed_kmh``."""

    if speed_kmh <= 0:
        raise InvalidSpeed(f"speed must be positive, got {speed_kmh}")
    return round_half_up(distance / speed_kmh * 60.0)


def straight_line_eta(
    origin: Optional[Coordinate],
    destination: Optional[Coordinate],
    speed_kmh: float = DEFAULT_SPEED_KMH,
) -> Optional[int]:
    """Quick ETA over the straight line, or ``None`` when either end is unknown."""

    if origin is None or destination is None:
        return None
    return eta_minutes(distance_km(origin, destination), speed_kmh)


__all__ = [
    "deg_to_rad",
    "rad_to_deg",
    "distance_km",
    "path_distance_km",
    "eta_minutes",
    "straight_line_eta",
]
