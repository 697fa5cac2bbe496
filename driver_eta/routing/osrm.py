"""Primary provider: OSRM-compatible ``/route`` service.

OSRM takes coordinates as ``lon,lat`` and returns GeoJSON geometry in the
same order; this module converts to and from the internal (lat, lon) order.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import requests

from ..config import OSRM_BASE_URL, ROUTING_REQUEST_TIMEOUT
from ..errors import MalformedResponse, TransportFailure
from ..models import Coordinate, RouteResult, RouteSource
from ..utils import round_half_up
from .base import HttpRouteProvider


def format_coordinates(coords: Sequence[Coordinate]) -> str:
    """Convert coordinates to OSRM format ``lon,lat;lon,lat;...``."""

    return ";".join(f"{c.longitude},{c.latitude}" for c in coords)


class OsrmRouteProvider(HttpRouteProvider):
    name = "osrm"
    source = RouteSource.PRIMARY

    def __init__(
        self,
        base_url: str = OSRM_BASE_URL,
        *,
        profile: str = "driving",
        session: requests.Session | None = None,
        timeout: float = ROUTING_REQUEST_TIMEOUT,
    ) -> None:
        super().__init__(base_url, session=session, timeout=timeout)
        self.profile = profile

    def build_request(
        self, origin: Coordinate, destination: Coordinate
    ) -> tuple[str, Dict[str, str]]:
        coordinates = format_coordinates([origin, destination])
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinates}"
        params = {"overview": "full", "geometries": "geojson"}
        return url, params

    def parse_route(self, payload: Dict[str, Any]) -> RouteResult:
        code = payload.get("code")
        if code is not None and code != "Ok":
            raise TransportFailure(
                f"osrm error: {code} {payload.get('message', '')}".rstrip()
            )
        routes = payload.get("routes")
        if not routes:
            raise MalformedResponse("osrm returned no routes")
        route = routes[0]
        path = _geojson_path(route["geometry"]["coordinates"])
        if not path:
            raise MalformedResponse("osrm route geometry is empty")
        return RouteResult(
            distance_km=float(route["distance"]) / 1000.0,
            duration_min=round_half_up(float(route["duration"]) / 60.0),
            path=tuple(path),
            source=self.source,
        )


def _geojson_path(raw: Sequence[Sequence[float]]) -> List[Coordinate]:
    path: List[Coordinate] = []
    for pair in raw:
        if len(pair) < 2:
            raise ValueError("Expected lon/lat pair in OSRM geometry")
        lon, lat = pair[0], pair[1]
        path.append(Coordinate(float(lat), float(lon)))
    return path


__all__ = ["OsrmRouteProvider", "format_coordinates"]
