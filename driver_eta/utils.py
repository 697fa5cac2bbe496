"""General utility helpers shared across modules."""

from __future__ import annotations

import json
import math
from datetime import date, datetime, time
from enum import Enum
from typing import Any


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``2.5 -> 3``).

    Python's ``round`` uses banker's rounding, which would make a 2.5 minute
    ETA read as 2 but a 3.5 minute one as 4.
    """

    return int(math.floor(value + 0.5))


def format_minutes(minutes: int) -> str:
    """Format minutes into a ``Xh Ym`` / ``Ym`` string."""

    hours, mins = divmod(int(minutes), 60)
    if hours:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def _normalise_value(value: Any) -> Any:
    """Convert objects to JSON-friendly representations."""

    if isinstance(value, Enum):
        return _normalise_value(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore")
    if isinstance(value, (list, tuple)):
        return [_normalise_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _normalise_value(val) for key, val in value.items()}
    return value


def json_dumps(value: Any) -> str:
    """Return compact JSON text for storage."""

    return json.dumps(_normalise_value(value), separators=(",", ":"))
