"""Position tracking: the location contract and the filtering tracker."""

from .sources import LocationSource, ScriptedLocationSource  # noqa: F401
from .tracker import LocationTracker, TrackerState, TrackingHandle  # noqa: F401
