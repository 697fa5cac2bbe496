"""Central error types used across the application."""

from __future__ import annotations

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .models import Coordinate


class DriverEtaError(RuntimeError):
    """Base error for the ETA engine."""


class ProviderError(DriverEtaError):
    """Base error for remote routing provider failures (recovered by the chain)."""


class TransportFailure(ProviderError):
    """Raised on network errors, timeouts, or non-success HTTP statuses."""


class MalformedResponse(ProviderError):
    """Raised when a provider returns JSON of an unexpected shape."""


class PermissionDenied(DriverEtaError):
    """Raised when location access is refused by the platform."""


class TripError(DriverEtaError):
    """Base error for trip sequencing mistakes made by the caller."""


class NoActiveTrip(TripError):
    """Raised when ending a trip while none is in progress."""


class TripAlreadyActive(TripError):
    """Raised when starting a trip while another is still in progress."""


class NoActiveLocation(TripError):
    """Raised when a trip operation needs a position that is unavailable."""


class TrackerUnavailable(DriverEtaError):
    """Raised when live tracking is requested from a service built without a tracker."""


class TruncatedInput(DriverEtaError):
    """Raised by strict polyline decoding when the input ends mid-coordinate."""

    def __init__(self, message: str, partial: List["Coordinate"]) -> None:
        super().__init__(message)
        self.partial = partial


class StorageError(DriverEtaError):
    """Raised when a value cannot be written to the key-value store."""


class InvalidSpeed(DriverEtaError, ValueError):
    """Raised when an ETA is requested for a non-positive speed."""


class InvalidCoordinate(DriverEtaError, ValueError):
    """Raised when latitude or longitude fall outside their valid range."""


__all__ = [
    "DriverEtaError",
    "ProviderError",
    "TransportFailure",
    "MalformedResponse",
    "PermissionDenied",
    "TripError",
    "NoActiveTrip",
    "TripAlreadyActive",
    "NoActiveLocation",
    "TrackerUnavailable",
    "TruncatedInput",
    "StorageError",
    "InvalidSpeed",
    "InvalidCoordinate",
]
