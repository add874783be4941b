"""Earthquake data model and parsing - Pure functions.

This module turns the raw USGS GeoJSON response body into typed
EarthquakeRecord objects. All functions are pure; logging is the only
side channel and never changes what is returned.
"""

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from src.core.errors import ParseError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EarthquakeRecord:
    """Immutable earthquake list entry.

    Attributes:
        magnitude: Earthquake magnitude
        location: Human-readable place description
        timestamp: Event time in milliseconds since epoch
        detail_url: USGS event detail page
    """
    magnitude: float
    location: str
    timestamp: int
    detail_url: str

    @property
    def time(self) -> datetime:
        """Return the event time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a magnitude
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_timestamp(value: Any) -> bool:
    """True if value is integer milliseconds that datetime can represent."""
    if not _is_integer(value):
        return False
    try:
        datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return False
    return True


def parse_feature(feature: Any) -> EarthquakeRecord | None:
    """Parse a single GeoJSON feature into an EarthquakeRecord.

    Pure function: returns None unless every required property is
    present and well-typed. Partial records are never built.

    Args:
        feature: One element of the ``features`` array

    Returns:
        EarthquakeRecord or None if the feature is malformed
    """
    if not isinstance(feature, dict):
        return None

    props = feature.get("properties")
    if not isinstance(props, dict):
        return None

    magnitude = props.get("mag")
    place = props.get("place")
    time_ms = props.get("time")
    url = props.get("url")

    if not _is_number(magnitude):
        return None
    if not isinstance(place, str):
        return None
    if not _is_timestamp(time_ms):
        return None
    if not isinstance(url, str):
        return None

    return EarthquakeRecord(
        magnitude=float(magnitude),
        location=place,
        timestamp=time_ms,
        detail_url=url,
    )


def parse_document(body: str) -> list[Any]:
    """Decode the response body and return its ``features`` array.

    Args:
        body: Raw JSON text

    Returns:
        The list of feature elements

    Raises:
        ParseError: If the body is not JSON, not an object, or has no
            ``features`` array
    """
    try:
        document = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e

    if not isinstance(document, dict):
        raise ParseError(
            f"Expected a JSON object, got {type(document).__name__}"
        )

    features = document.get("features")
    if not isinstance(features, list):
        raise ParseError("Document has no 'features' array")

    return features


def parse_earthquakes(body: str | None) -> list[EarthquakeRecord]:
    """Parse a USGS GeoJSON response body into EarthquakeRecords.

    Empty input is the normal "no data" case and yields an empty list.
    A document that cannot be decoded also yields an empty list.
    Malformed features are skipped individually; the remaining records
    are kept in input order.

    Args:
        body: Raw response text (may be None or empty)

    Returns:
        List of records in the order of the ``features`` array
    """
    if not body:
        logger.debug("Empty response body, no earthquakes to parse")
        return []

    try:
        features = parse_document(body)
    except ParseError as e:
        logger.warning("Failed to parse earthquake JSON: %s", e)
        return []

    records = []
    for index, feature in enumerate(features):
        record = parse_feature(feature)
        if record is None:
            logger.warning("Skipping malformed feature at index %d", index)
            continue
        records.append(record)

    logger.debug("Parsed %d of %d features", len(records), len(features))
    return records
