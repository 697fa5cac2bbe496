"""Trip lifecycle: one optional active trip plus the completed-trip history.

The ledger is the only owner of the active trip. Completing a trip appends it
to the history and rewrites the whole list under a single store key. The
ledger holds no locks; callers racing ``start_trip`` against ``end_trip`` must
synchronise externally.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from ..config import TRIP_HISTORY_KEY
from ..errors import NoActiveLocation, NoActiveTrip, TripAlreadyActive
from ..geo import distance_km
from ..models import Coordinate, Role, Trip
from ..storage import KeyValueStore, MemoryKeyValueStore
from ..utils import round_half_up

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[datetime], str]


def _epoch_millis_id(now: datetime) -> str:
    return str(int(now.timestamp() * 1000))


class TripLedger:
    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        clock: Clock = datetime.now,
        id_factory: IdFactory = _epoch_millis_id,
        history_key: str = TRIP_HISTORY_KEY,
    ) -> None:
        self._store = store if store is not None else MemoryKeyValueStore()
        self._clock = clock
        self._id_factory = id_factory
        self._history_key = history_key
        self._active: Optional[Trip] = None
        self._history: List[Trip] = self._load_history()

    @property
    def active_trip(self) -> Optional[Trip]:
        return self._active

    @property
    def history(self) -> Tuple[Trip, ...]:
        return tuple(self._history)

    def start_trip(self, role: Role, origin: Optional[Coordinate]) -> Trip:
        if origin is None:
            raise NoActiveLocation("Cannot start a trip without a current location")
        if self._active is not None:
            raise TripAlreadyActive(f"Trip {self._active.id} is already in progress")
        now = self._clock()
        trip = Trip(
            id=self._id_factory(now),
            date=now.date(),
            start_time=now.time().replace(microsecond=0),
            start_location=origin,
            end_location=origin,
            role=Role(role),
        )
        self._active = trip
        LOGGER.info("Trip %s started (%s)", trip.id, trip.role.value)
        return trip

    def end_trip(self, current_location: Optional[Coordinate]) -> Trip:
        if self._active is None:
            raise NoActiveTrip("No trip is in progress")
        if current_location is None:
            raise NoActiveLocation("Cannot end a trip without a current location")
        active = self._active
        now = self._clock()
        started_at = active.started_at.replace(tzinfo=now.tzinfo)
        elapsed_s = (now - started_at).total_seconds()
        completed = replace(
            active,
            end_time=now.time().replace(microsecond=0),
            duration_min=max(0, round_half_up(elapsed_s / 60.0)),
            distance_km=distance_km(active.start_location, current_location),
            end_location=current_location,
        )
        self._history.append(completed)
        self._active = None
        self._save_history()
        LOGGER.info(
            "Trip %s ended: %d min, %.2f km",
            completed.id,
            completed.duration_min,
            completed.distance_km,
        )
        return completed

    def total_distance_km(self) -> float:
        return sum(trip.distance_km for trip in self._history)

    def reload(self) -> None:
        """Re-read the history from the store (e.g. after an external clear)."""

        self._history = self._load_history()

    def _load_history(self) -> List[Trip]:
        raw = self._store.get(self._history_key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            LOGGER.warning(
                "Ignoring trip history under %s: expected a list, got %s",
                self._history_key,
                type(raw).__name__,
            )
            return []
        trips: List[Trip] = []
        for entry in raw:
            try:
                trips.append(Trip.from_dict(entry))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                LOGGER.warning("Skipping unreadable trip record %r: %s", entry, exc)
        return trips

    def _save_history(self) -> None:
        payload = [trip.to_dict() for trip in self._history]
        try:
            self._store.put(self._history_key, payload)
        except Exception as exc:
            LOGGER.error("Failed to save trip history: %s", exc, exc_info=True)


__all__ = ["TripLedger"]
