"""Provider protocol, attempt outcome type, and the shared HTTP provider base."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import requests

from ..config import ROUTING_REQUEST_TIMEOUT
from ..errors import MalformedResponse, ProviderError, TransportFailure
from ..models import Coordinate, RouteResult, RouteSource
from .response_handling import json_payload
from .session import create_session

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class RouteProvider(Protocol):
    """Anything that can turn an origin/destination pair into a route."""

    name: str
    source: RouteSource

    def fetch_route(self, origin: Coordinate, destination: Coordinate) -> RouteResult:
        ...


@dataclass(frozen=True, slots=True)
class ProviderOutcome:
    """Result of a single provider attempt: exactly one of ``result``/``error``."""

    provider: str
    result: Optional[RouteResult] = None
    error: Optional[ProviderError] = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("ProviderOutcome needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.result is not None


def attempt(
    provider: RouteProvider, origin: Coordinate, destination: Coordinate
) -> ProviderOutcome:
    """Run one provider call and capture its failure as a value."""

    try:
        result = provider.fetch_route(origin, destination)
    except ProviderError as exc:
        return ProviderOutcome(provider=provider.name, error=exc)
    except Exception as exc:
        LOGGER.error(
            "Routing provider %s raised unexpectedly: %s",
            provider.name,
            exc,
            exc_info=True,
        )
        error = ProviderError(f"{provider.name} failed unexpectedly: {exc}")
        error.__cause__ = exc
        return ProviderOutcome(provider=provider.name, error=error)
    return ProviderOutcome(provider=provider.name, result=result)


class HttpRouteProvider(ABC):
    """Base for providers backed by a single JSON GET request."""

    name = "http"
    source = RouteSource.PRIMARY

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = ROUTING_REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session or create_session()
        self._timeout = timeout

    def fetch_route(self, origin: Coordinate, destination: Coordinate) -> RouteResult:
        url, params = self.build_request(origin, destination)
        payload = self._get_json(url, params)
        try:
            return self.parse_route(payload)
        except ProviderError:
            raise
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise MalformedResponse(f"{self.name} response has unexpected shape: {exc}") from exc

    @abstractmethod
    def build_request(
        self, origin: Coordinate, destination: Coordinate
    ) -> tuple[str, Any]:
        """Return the request URL and query parameters."""

    @abstractmethod
    def parse_route(self, payload: Dict[str, Any]) -> RouteResult:
        """Turn the decoded JSON body into a route; raise ``ProviderError`` on failure."""

    def _get_json(self, url: str, params: Any) -> Dict[str, Any]:
        LOGGER.debug("%s GET %s params=%s", self.name, url, _redact(params))
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportFailure(f"{self.name} transport error: {exc}") from exc
        return json_payload(response, self.name)


_SECRET_PARAMS = {"key", "api_key", "access_token"}


def _redact(params: Any) -> Any:
    if isinstance(params, dict):
        params = list(params.items())
    if not isinstance(params, list):
        return params
    return [
        (name, "***" if name in _SECRET_PARAMS else value) for name, value in params
    ]


__all__ = ["HttpRouteProvider", "ProviderOutcome", "RouteProvider", "attempt"]
