"""Trip lifecycle and history."""

from .ledger import TripLedger  # noqa: F401
