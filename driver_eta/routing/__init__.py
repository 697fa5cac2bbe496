"""Route-directions providers, the offline fallback, and the provider chain."""

from .base import HttpRouteProvider, ProviderOutcome, RouteProvider, attempt  # noqa: F401
from .chain import RouteProviderChain, RouteResolution, build_default_chain  # noqa: F401
from .fallback import Direction, FallbackRouter, classify_direction  # noqa: F401
from .graphhopper import GraphHopperRouteProvider  # noqa: F401
from .osrm import OsrmRouteProvider  # noqa: F401
from .session import create_session  # noqa: F401
