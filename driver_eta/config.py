"""Central configuration for the driver ETA engine.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Endpoints and keys are read from environment variables
(optionally via a local `.env`).
"""

from __future__ import annotations

import os

from dotenv import load_dotenv


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# Routing providers
# ---------------------------------------------------------------------------
# Primary provider: OSRM-compatible /route service.
OSRM_BASE_URL = os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org")

# Secondary provider: GraphHopper-compatible /route service. The secondary
# provider is skipped by the default chain when no key is configured and
# GRAPHHOPPER_REQUIRE_KEY is left enabled (the public endpoint rejects
# anonymous calls).
GRAPHHOPPER_BASE_URL = os.getenv(
    "GRAPHHOPPER_BASE_URL", "https://graphhopper.com/api/1"
)
GRAPHHOPPER_API_KEY = os.getenv("GRAPHHOPPER_API_KEY", "")
GRAPHHOPPER_REQUIRE_KEY = _env_bool("GRAPHHOPPER_REQUIRE_KEY", True)

# Identifying header sent with every routing request. Public OSRM and
# GraphHopper instances ask clients to identify themselves.
ROUTING_USER_AGENT = os.getenv("ROUTING_USER_AGENT", "driver-eta/0.1")

# Request timeout in seconds. Each provider gets exactly one attempt.
ROUTING_REQUEST_TIMEOUT = _env_float("ROUTING_REQUEST_TIMEOUT", 8.0)

# HTTP session pool sizes.
HTTP_POOL_CONNECTIONS = 4
HTTP_POOL_MAXSIZE = 4


# ---------------------------------------------------------------------------
# Geo / ETA estimation
# ---------------------------------------------------------------------------
EARTH_RADIUS_KM = 6371.0

# Average speed used for straight-line (inter-city) estimates.
DEFAULT_SPEED_KMH = _env_float("DEFAULT_SPEED_KMH", 30.0)

# Fixed speed and congestion multiplier for the offline fallback router.
# These are hand-tuned values kept for behavioural parity.
FALLBACK_SPEED_KMH = 25.0
CONGESTION_FACTOR = 1.3

# Fallback durations never drop below this many minutes.
MIN_FALLBACK_MINUTES = 2

# Per-axis offset (degrees, roughly 330 m) used to classify the origin as
# north/south/east/west of the destination.
DIRECTION_THRESHOLD_DEG = 0.003

# Below this straight-line distance the route is the direct segment and no
# provider is queried.
NEAR_DESTINATION_KM = 0.2


# ---------------------------------------------------------------------------
# Location tracking
# ---------------------------------------------------------------------------
# Minimum spacing between delivered position updates.
TRACKER_MIN_DISTANCE_M = _env_float("TRACKER_MIN_DISTANCE_M", 10.0)
TRACKER_MIN_INTERVAL_MS = _env_int("TRACKER_MIN_INTERVAL_MS", 5000)


# ---------------------------------------------------------------------------
# Trip history persistence
# ---------------------------------------------------------------------------
# Key under which the full ordered trip history is stored.
TRIP_HISTORY_KEY = os.getenv("TRIP_HISTORY_KEY", "tripHistory")
