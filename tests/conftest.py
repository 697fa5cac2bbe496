"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable Kenitra coordinates plus a
fake HTTP session so routing tests never touch the network.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any, Callable, List

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from driver_eta.models import Coordinate


class FakeResp:
    """Minimal fake response matching needed parts of requests.Response."""

    def __init__(self, status_code=200, data=None, text=None, url="http://fake"):
        self.status_code = status_code
        self._data = data
        self._text = text
        self.url = url

    def json(self):
        if self._data is None:
            raise ValueError("No JSON object could be decoded")
        return self._data

    @property
    def text(self):
        if self._text is not None:
            return self._text
        try:
            return json.dumps(self._data)
        except Exception:
            return str(self._data)


class FakeSession:
    """Records GET calls and answers from a list of responses or exceptions."""

    def __init__(self, *responses: Any):
        self._responses: List[Any] = list(responses)
        self.calls: List[dict] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if not self._responses:
            raise AssertionError(f"Unexpected GET {url}")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            return item(url, params)
        return item


# --- Factory helpers -------------------------------------------------
def osrm_payload(coords_lonlat, distance_m=1200.0, duration_s=300.0):
    return {
        "code": "Ok",
        "routes": [
            {
                "distance": distance_m,
                "duration": duration_s,
                "geometry": {"type": "LineString", "coordinates": coords_lonlat},
            }
        ],
    }


def graphhopper_payload(points, distance_m=1500.0, time_ms=240000):
    return {"paths": [{"distance": distance_m, "time": time_ms, "points": points}]}


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def rider_location() -> Coordinate:
    return Coordinate(34.263, -6.581)


@pytest.fixture
def driver_far_north() -> Coordinate:
    return Coordinate(34.27, -6.582)


@pytest.fixture
def fake_session_factory() -> Callable[..., FakeSession]:
    return FakeSession
