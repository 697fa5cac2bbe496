"""Tests for EtaService wiring between tracker, chain and listener."""

from __future__ import annotations

import logging
import threading
from typing import List

import pytest

from driver_eta.errors import DriverEtaError, TrackerUnavailable, TransportFailure
from driver_eta.location import LocationTracker, ScriptedLocationSource
from driver_eta.models import Coordinate, LocationSample, RouteResult, RouteSource
from driver_eta.routing.chain import RouteProviderChain
from driver_eta.services import EtaService, EtaServiceConfig

DRIVER = Coordinate(34.261, -6.583)
RIDER = Coordinate(34.2702, -6.5802)


class RecordingProvider:
    name = "recording"
    source = RouteSource.PRIMARY

    def __init__(self, fail: bool = False) -> None:
        self.requests: List[tuple] = []
        self.fail = fail

    def fetch_route(self, origin, destination):
        self.requests.append((origin, destination))
        if self.fail:
            raise TransportFailure("offline")
        return RouteResult(
            distance_km=1.4, duration_min=4, path=(origin, destination), source=self.source
        )


def test_refresh_waits_for_both_ends():
    provider = RecordingProvider()
    service = EtaService(RouteProviderChain([provider]))
    assert service.refresh() is None
    assert service.update_driver_location(DRIVER) is None
    assert provider.requests == []
    result = service.set_destination(RIDER)
    assert result.duration_min == 4
    assert provider.requests == [(DRIVER, RIDER)]
    assert service.latest_route is result


def test_listener_receives_each_route():
    routes: List[RouteResult] = []
    service = EtaService(
        RouteProviderChain([RecordingProvider()]),
        destination=RIDER,
        config=EtaServiceConfig(listener=routes.append),
    )
    service.update_driver_location(DRIVER)
    service.update_driver_location(Coordinate(34.265, -6.582))
    assert len(routes) == 2
    assert routes[-1].path[0] == Coordinate(34.265, -6.582)


def test_provider_failure_still_yields_route():
    service = EtaService(RouteProviderChain([RecordingProvider(fail=True)]), destination=RIDER)
    result = service.update_driver_location(DRIVER)
    assert result.source is RouteSource.FALLBACK
    assert result.path[-1] == RIDER


def test_tracker_updates_drive_refreshes():
    provider = RecordingProvider()
    source = ScriptedLocationSource(DRIVER)
    tracker = LocationTracker(source, min_distance_m=0, min_interval_ms=0)
    service = EtaService(RouteProviderChain([provider]), tracker, destination=RIDER)

    handle = service.start()
    source.emit(LocationSample(DRIVER, 0))
    assert service.driver_location == DRIVER
    assert provider.requests == [(DRIVER, RIDER)]

    service.stop()
    assert handle.closed
    source.emit(LocationSample(Coordinate(34.265, -6.582), 10_000))
    assert len(provider.requests) == 1


def test_start_without_tracker_raises():
    service = EtaService(RouteProviderChain([]))
    with pytest.raises(TrackerUnavailable):
        service.start()
    service.stop()


def test_straight_line_minutes():
    service = EtaService(RouteProviderChain([]), destination=RIDER)
    assert service.straight_line_minutes() is None
    service.update_driver_location(DRIVER)
    # About 1.06 km at 30 km/h.
    assert service.straight_line_minutes() == 2


def test_tracker_unavailable_is_a_package_error():
    assert issubclass(TrackerUnavailable, DriverEtaError)


class GatedProvider(RecordingProvider):
    """Blocks requests from ``slow_origin`` until ``release`` is set."""

    def __init__(self, slow_origin: Coordinate) -> None:
        super().__init__()
        self.slow_origin = slow_origin
        self.entered = threading.Event()
        self.release = threading.Event()

    def fetch_route(self, origin, destination):
        if origin == self.slow_origin:
            self.entered.set()
            self.release.wait(5)
        return super().fetch_route(origin, destination)


def test_slow_route_for_old_position_does_not_replace_newer_one():
    old = Coordinate(34.25, -6.583)
    new = Coordinate(34.28, -6.583)
    provider = GatedProvider(slow_origin=old)
    published: List[RouteResult] = []
    service = EtaService(
        RouteProviderChain([provider]),
        destination=RIDER,
        config=EtaServiceConfig(listener=published.append),
    )
    stale_results: List[RouteResult] = []
    worker = threading.Thread(
        target=lambda: stale_results.append(service.update_driver_location(old))
    )
    worker.start()
    assert provider.entered.wait(5)

    fresh = service.update_driver_location(new)
    provider.release.set()
    worker.join(5)

    assert not worker.is_alive()
    assert stale_results[0].path[0] == old
    assert service.driver_location == new
    assert service.latest_route is fresh
    assert service.latest_route.path[0] == new
    assert [route.path[0] for route in published] == [new]


def test_destination_change_supersedes_in_flight_route():
    provider = GatedProvider(slow_origin=DRIVER)
    service = EtaService(RouteProviderChain([provider]), destination=RIDER)
    worker = threading.Thread(target=service.update_driver_location, args=(DRIVER,))
    worker.start()
    assert provider.entered.wait(5)

    other = Coordinate(34.251, -6.5868)
    # Same origin, so this request also waits on the gate.
    setter = threading.Thread(target=service.set_destination, args=(other,))
    setter.start()
    provider.release.set()
    worker.join(5)
    setter.join(5)

    assert service.latest_route.path[-1] == other


def test_log_line_uses_formatted_minutes(caplog):
    service = EtaService(RouteProviderChain([RecordingProvider()]), destination=RIDER)
    with caplog.at_level(logging.INFO, logger="EtaService"):
        service.update_driver_location(DRIVER)
    assert "ETA 4m over 1.40 km (source=primary)" in caplog.text
