"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS API client (HTTP)
- Connectivity check (sockets)
- Settings store (YAML files/environment)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.usgs_client import USGSClient, FetchResult
from src.shell.connectivity import is_network_available, is_url_reachable
from src.shell.settings_store import load_settings, save_settings

__all__ = [
    "USGSClient",
    "FetchResult",
    "is_network_available",
    "is_url_reachable",
    "load_settings",
    "save_settings",
]
