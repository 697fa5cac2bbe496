from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import InvalidCoordinate


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        # NaN fails both comparisons.
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidCoordinate(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinate(f"longitude out of range: {self.longitude}")

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Coordinate":
        return cls(float(payload["latitude"]), float(payload["longitude"]))


class RouteSource(str, Enum):
    """Which link of the provider chain produced a route."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class RouteResult:
    distance_km: float
    duration_min: int
    path: Tuple[Coordinate, ...]
    source: RouteSource

    def __post_init__(self) -> None:
        if self.distance_km < 0:
            raise ValueError("distance_km must be >= 0")
        if self.duration_min < 0:
            raise ValueError("duration_min must be >= 0")
        if not self.path:
            raise ValueError("path must contain at least one coordinate")


class Role(str, Enum):
    DRIVER = "driver"
    RIDER = "rider"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Role"]:
        # Histories written by the mobile app name the passenger role "student".
        if isinstance(value, str) and value.strip().lower() == "student":
            return cls.RIDER
        return None


@dataclass(frozen=True, slots=True)
class LocationSample:
    """A single raw position fix from the platform stream."""

    coordinate: Coordinate
    timestamp_ms: int


_TIME_FORMAT = "%H:%M:%S"


@dataclass(frozen=True, slots=True)
class Trip:
    id: str
    date: date
    start_time: time
    start_location: Coordinate
    end_location: Coordinate
    role: Role
    end_time: Optional[time] = None
    duration_min: int = 0
    distance_km: float = 0.0

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def started_at(self) -> datetime:
        return datetime.combine(self.date, self.start_time)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the stored trip-history JSON shape."""

        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "startTime": self.start_time.strftime(_TIME_FORMAT),
            "endTime": self.end_time.strftime(_TIME_FORMAT) if self.end_time else "",
            "duration": self.duration_min,
            "distance": self.distance_km,
            "startLocation": self.start_location.to_dict(),
            "endLocation": self.end_location.to_dict(),
            "userType": self.role.value,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Trip":
        end_raw = payload.get("endTime") or ""
        return cls(
            id=str(payload["id"]),
            date=date.fromisoformat(payload["date"]),
            start_time=_parse_time(payload["startTime"]),
            end_time=_parse_time(end_raw) if end_raw else None,
            duration_min=int(payload.get("duration", 0)),
            distance_km=float(payload.get("distance", 0.0)),
            start_location=Coordinate.from_dict(payload["startLocation"]),
            end_location=Coordinate.from_dict(payload["endLocation"]),
            role=Role(payload.get("userType", Role.DRIVER.value)),
        )


def _parse_time(value: str) -> time:
    # Older histories stored "HH:MM" only.
    return time.fromisoformat(value)


@dataclass(slots=True)
class Destination:
    id: str
    name: str
    address: str
    coordinate: Coordinate
    is_favorite: bool = False
