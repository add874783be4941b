"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Earthquake JSON parsing
- Request URL construction
- Settings validation
- List item formatting

All functions here are deterministic and have no I/O.
"""

from src.core.earthquake import EarthquakeRecord, parse_earthquakes
from src.core.query import build_request_url
from src.core.config import Settings, validate_settings
from src.core.formatter import format_list_item, format_report_lines
from src.core.errors import MalformedUrlError, NetworkError, ParseError

__all__ = [
    # Earthquake
    "EarthquakeRecord",
    "parse_earthquakes",
    # Query
    "build_request_url",
    # Config
    "Settings",
    "validate_settings",
    # Formatter
    "format_list_item",
    "format_report_lines",
    # Errors
    "MalformedUrlError",
    "NetworkError",
    "ParseError",
]
