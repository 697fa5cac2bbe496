"""Secondary provider: GraphHopper-compatible ``/route`` service."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import requests

from ..config import GRAPHHOPPER_API_KEY, GRAPHHOPPER_BASE_URL, ROUTING_REQUEST_TIMEOUT
from ..errors import MalformedResponse
from ..models import Coordinate, RouteResult, RouteSource
from ..polyline_codec import decode as decode_polyline
from ..utils import round_half_up
from .base import HttpRouteProvider

QueryParams = List[Tuple[str, str]]


class GraphHopperRouteProvider(HttpRouteProvider):
    name = "graphhopper"
    source = RouteSource.SECONDARY

    def __init__(
        self,
        base_url: str = GRAPHHOPPER_BASE_URL,
        *,
        api_key: str = GRAPHHOPPER_API_KEY,
        profile: str = "car",
        session: requests.Session | None = None,
        timeout: float = ROUTING_REQUEST_TIMEOUT,
    ) -> None:
        super().__init__(base_url, session=session, timeout=timeout)
        self.api_key = api_key
        self.profile = profile

    def build_request(
        self, origin: Coordinate, destination: Coordinate
    ) -> tuple[str, QueryParams]:
        # "point" repeats, so params go out as an ordered list of pairs.
        params: QueryParams = [
            ("point", f"{origin.latitude},{origin.longitude}"),
            ("point", f"{destination.latitude},{destination.longitude}"),
            ("profile", self.profile),
            ("points_encoded", "true"),
            ("instructions", "false"),
        ]
        if self.api_key:
            params.append(("key", self.api_key))
        return f"{self.base_url}/route", params

    def parse_route(self, payload: Dict[str, Any]) -> RouteResult:
        paths = payload.get("paths")
        if not paths:
            raise MalformedResponse("graphhopper returned no paths")
        best = paths[0]
        points = best["points"]
        if not isinstance(points, str):
            raise MalformedResponse("graphhopper points are not polyline-encoded")
        path = decode_polyline(points)
        if not path:
            raise MalformedResponse("graphhopper path geometry is empty")
        return RouteResult(
            distance_km=float(best["distance"]) / 1000.0,
            duration_min=round_half_up(float(best["time"]) / 60000.0),
            path=tuple(path),
            source=self.source,
        )


__all__ = ["GraphHopperRouteProvider"]
