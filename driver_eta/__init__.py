"""Driver ETA engine: routing with offline fallback, tracking, and trips."""

import logging

from .errors import (
    DriverEtaError,
    InvalidSpeed,
    NoActiveLocation,
    NoActiveTrip,
    PermissionDenied,
    TrackerUnavailable,
    TripAlreadyActive,
    TruncatedInput,
)
from .geo import distance_km, eta_minutes
from .location import LocationTracker, ScriptedLocationSource
from .models import Coordinate, Role, RouteResult, RouteSource, Trip
from .routing import FallbackRouter, RouteProviderChain, build_default_chain
from .services import EtaService, EtaServiceConfig
from .storage import MemoryKeyValueStore
from .trips import TripLedger


def setup_logging(level: int = logging.INFO) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=level,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


__all__ = [
    "Coordinate",
    "DriverEtaError",
    "EtaService",
    "EtaServiceConfig",
    "FallbackRouter",
    "InvalidSpeed",
    "LocationTracker",
    "MemoryKeyValueStore",
    "NoActiveLocation",
    "NoActiveTrip",
    "PermissionDenied",
    "Role",
    "RouteProviderChain",
    "RouteResult",
    "RouteSource",
    "ScriptedLocationSource",
    "TrackerUnavailable",
    "Trip",
    "TripAlreadyActive",
    "TripLedger",
    "TruncatedInput",
    "build_default_chain",
    "distance_km",
    "eta_minutes",
    "setup_logging",
]
