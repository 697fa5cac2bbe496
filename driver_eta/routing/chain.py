"""Ordered provider failover ending in the offline fallback router."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

import requests

from ..config import GRAPHHOPPER_API_KEY, GRAPHHOPPER_REQUIRE_KEY
from ..models import Coordinate, RouteResult
from .base import ProviderOutcome, RouteProvider, attempt
from .fallback import FallbackRouter
from .graphhopper import GraphHopperRouteProvider
from .osrm import OsrmRouteProvider
from .session import create_session

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RouteResolution:
    result: RouteResult
    outcomes: List[ProviderOutcome] = field(default_factory=list)


class RouteProviderChain:
    """Try remote providers in priority order, then synthesise a route offline.

    Each provider gets a single attempt. Failures are captured as
    :class:`ProviderOutcome` values and logged; ``get_route`` itself never
    raises for provider problems.
    """

    def __init__(
        self,
        providers: Sequence[RouteProvider],
        fallback: FallbackRouter | None = None,
    ) -> None:
        self.providers: List[RouteProvider] = list(providers)
        self.fallback = fallback or FallbackRouter()

    def get_route(self, origin: Coordinate, destination: Coordinate) -> RouteResult:
        return self.resolve(origin, destination).result

    def resolve(self, origin: Coordinate, destination: Coordinate) -> RouteResolution:
        """Like ``get_route`` but also return the outcome of every provider tried."""

        outcomes: List[ProviderOutcome] = []
        if self.fallback.is_near(origin, destination):
            LOGGER.debug("Origin is next to destination; using direct segment")
            return RouteResolution(self.fallback.fetch_route(origin, destination), outcomes)

        for provider in self.providers:
            LOGGER.debug("Requesting route from %s", provider.name)
            outcome = attempt(provider, origin, destination)
            outcomes.append(outcome)
            if outcome.result is not None:
                LOGGER.info(
                    "Route from %s: %.2fkm, %dmin",
                    provider.name,
                    outcome.result.distance_km,
                    outcome.result.duration_min,
                )
                return RouteResolution(outcome.result, outcomes)
            LOGGER.warning(
                "Routing provider %s failed (%s): %s",
                provider.name,
                type(outcome.error).__name__,
                outcome.error,
            )

        result = self.fallback.fetch_route(origin, destination)
        LOGGER.info(
            "All %d routing providers failed; fallback route %.2fkm, %dmin",
            len(self.providers),
            result.distance_km,
            result.duration_min,
        )
        return RouteResolution(result, outcomes)


def build_default_chain(session: requests.Session | None = None) -> RouteProviderChain:
    """Wire the configured providers into a chain sharing one HTTP session."""

    session = session or create_session()
    providers: List[RouteProvider] = [OsrmRouteProvider(session=session)]
    if GRAPHHOPPER_API_KEY or not GRAPHHOPPER_REQUIRE_KEY:
        providers.append(
            GraphHopperRouteProvider(api_key=GRAPHHOPPER_API_KEY, session=session)
        )
    else:
        LOGGER.info("GRAPHHOPPER_API_KEY not set; secondary routing provider disabled")
    return RouteProviderChain(providers)


__all__ = ["RouteProviderChain", "RouteResolution", "build_default_chain"]
