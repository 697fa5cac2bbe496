"""Shared HTTP response helpers for routing provider calls."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ..errors import MalformedResponse, TransportFailure

LOGGER = logging.getLogger(__name__)

__all__ = [
    "json_payload",
    "extract_error",
]


def json_payload(response: requests.Response, context: str) -> Dict[str, Any]:
    """Return the JSON object of a successful response.

    Raises ``TransportFailure`` for non-2xx statuses and ``MalformedResponse``
    when the body is not a JSON object.
    """

    status = response.status_code
    if not 200 <= status < 300:
        detail = extract_error(response)
        message = f"{context} request failed (status {status})"
        if detail:
            message = f"{message} | {detail}"
        raise TransportFailure(message)
    data = _safe_json(response)
    if not isinstance(data, dict):
        raise MalformedResponse(f"{context} returned a non-object JSON body")
    return data


def extract_error(resp: Optional[requests.Response]) -> Optional[str]:
    """Return compact string with provider error info (message + hints) if present."""

    if resp is None:
        return None
    data = _safe_json(resp)
    if data is None:
        return _extract_error_text(resp)
    if not isinstance(data, dict):
        return None
    parts = _collect_error_parts(data)
    return " | ".join(parts) if parts else None


def _safe_json(resp: requests.Response) -> Optional[Any]:
    """Safely parse JSON; return None if parsing fails."""

    try:
        return resp.json()
    except ValueError as exc:
        LOGGER.debug(
            "Failed to decode JSON from %s: %s", getattr(resp, "url", "?"), exc
        )
        return None


def _extract_error_text(resp: requests.Response) -> Optional[str]:
    """Best-effort plain-text extraction when JSON parsing fails."""

    text = getattr(resp, "text", "")
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    return (trimmed[:197] + "...") if len(trimmed) > 200 else trimmed


def _collect_error_parts(data: Dict[str, Any]) -> List[str]:
    """Build error snippets from OSRM (code/message) and GraphHopper (message/hints) bodies."""

    parts: List[str] = []
    code = data.get("code")
    if code and code != "Ok":
        parts.append(str(code))
    message = data.get("message")
    if message:
        parts.append(str(message))
    hints = data.get("hints")
    if isinstance(hints, list):
        for hint in hints:
            if isinstance(hint, dict) and hint.get("message"):
                hint_message = str(hint["message"])
                if hint_message not in parts:
                    parts.append(hint_message)
    return parts
