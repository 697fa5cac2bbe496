"""Service layer package.

Exports high-level services consumed by presentation layers.
"""

from .eta_service import EtaService, EtaServiceConfig

__all__ = ["EtaService", "EtaServiceConfig"]
