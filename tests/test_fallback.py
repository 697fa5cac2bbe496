"""Tests for the offline fallback router."""

from __future__ import annotations

import pytest

from driver_eta.geo import distance_km, path_distance_km
from driver_eta.models import Coordinate, RouteSource
from driver_eta.routing.fallback import (
    ROUTE_TEMPLATES,
    Direction,
    FallbackRouter,
    classify_direction,
    fallback_duration_minutes,
    template_points,
)

DEST = Coordinate(34.263, -6.581)


@pytest.mark.parametrize(
    "origin, expected",
    [
        (Coordinate(34.27, -6.582), Direction.NORTH),
        (Coordinate(34.25, -6.581), Direction.SOUTH),
        (Coordinate(34.263, -6.57), Direction.EAST),
        (Coordinate(34.263, -6.59), Direction.WEST),
        (Coordinate(34.2645, -6.5825), Direction.CENTER),
    ],
)
def test_classify_direction(origin, expected):
    assert classify_direction(origin, DEST) is expected


def test_direction_priority_north_beats_east_and_west():
    assert classify_direction(Coordinate(34.27, -6.57), DEST) is Direction.NORTH
    assert classify_direction(Coordinate(34.27, -6.59), DEST) is Direction.NORTH


def test_direction_priority_south_beats_east_and_west():
    assert classify_direction(Coordinate(34.25, -6.57), DEST) is Direction.SOUTH
    assert classify_direction(Coordinate(34.25, -6.59), DEST) is Direction.SOUTH


def test_threshold_is_exclusive():
    on_boundary = Coordinate(DEST.latitude + 0.003, DEST.longitude)
    assert classify_direction(on_boundary, DEST) is Direction.CENTER


def test_north_origin_route_starts_at_origin_and_ends_at_destination(driver_far_north):
    result = FallbackRouter().fetch_route(driver_far_north, DEST)
    assert result.source is RouteSource.FALLBACK
    assert result.path[0] == driver_far_north
    assert result.path[-1] == DEST
    template = template_points(Direction.NORTH, DEST)
    assert list(result.path[1:]) == template[1:]


def test_route_distance_is_path_integrated(driver_far_north):
    result = FallbackRouter().fetch_route(driver_far_north, DEST)
    assert result.distance_km == pytest.approx(path_distance_km(result.path))
    assert result.distance_km > distance_km(driver_far_north, DEST)


def test_route_duration_uses_congested_fallback_speed(driver_far_north):
    result = FallbackRouter().fetch_route(driver_far_north, DEST)
    expected = max(2, int(result.distance_km / 25 * 60 * 1.3 + 0.5))
    assert result.duration_min == expected


def test_near_origin_gets_direct_segment():
    origin = Coordinate(34.2630, -6.5815)
    result = FallbackRouter().fetch_route(origin, DEST)
    assert result.path == (origin, DEST)
    assert result.distance_km == pytest.approx(distance_km(origin, DEST))
    assert result.duration_min == 2


def test_same_point_route():
    result = FallbackRouter().fetch_route(DEST, DEST)
    assert result.path == (DEST, DEST)
    assert result.distance_km == 0.0
    assert result.duration_min == 2


def test_duration_floor_and_scaling():
    assert fallback_duration_minutes(0.0) == 2
    assert fallback_duration_minutes(0.5) == 2
    # 25 km at 25 km/h is 60 min, times 1.3 congestion.
    assert fallback_duration_minutes(25.0) == 78


@pytest.mark.parametrize("direction", list(Direction))
def test_every_template_ends_on_destination(direction):
    assert ROUTE_TEMPLATES[direction][-1] == (0.0, 0.0)
    points = template_points(direction, DEST)
    assert points[-1] == DEST


def test_far_away_origin_still_routes():
    origin = Coordinate(33.5731, -7.5898)  # Casablanca
    result = FallbackRouter().fetch_route(origin, DEST)
    assert result.path[0] == origin
    assert result.path[-1] == DEST
    assert result.duration_min > 60


def test_templates_near_the_pole_stay_valid():
    dest = Coordinate(89.999, 179.999)
    origin = Coordinate(89.9, 179.999)
    result = FallbackRouter().fetch_route(origin, dest)
    assert all(-90 <= p.latitude <= 90 for p in result.path)
    assert all(-180 <= p.longitude <= 180 for p in result.path)


def test_custom_templates_without_direction_use_center(driver_far_north):
    templates = {Direction.CENTER: ((0.001, 0.0), (0.0, 0.0))}
    result = FallbackRouter(templates).fetch_route(driver_far_north, DEST)
    assert result.path == (driver_far_north, DEST)
    assert template_points(Direction.NORTH, DEST, templates) == [
        Coordinate(DEST.latitude + 0.001, DEST.longitude),
        DEST,
    ]
