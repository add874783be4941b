"""List item formatting - Pure functions.

This module formats earthquake records for display in the list.
All functions are pure with no side effects.
"""

import math
from datetime import datetime, timezone, tzinfo
from typing import Any

from src.core.earthquake import EarthquakeRecord


# Separator between the offset and the primary location in USGS place text
LOCATION_SEPARATOR = " of "

# Offset shown when the place text carries no distance
DEFAULT_LOCATION_OFFSET = "Near the"

# Circle colours by floor(magnitude); 0 and 1 share a colour
MAGNITUDE_COLORS = {
    0: "#4A7BA7",
    1: "#4A7BA7",
    2: "#04B4B3",
    3: "#10CAC9",
    4: "#F5A623",
    5: "#FF7D50",
    6: "#FC6644",
    7: "#E75F40",
    8: "#E13A20",
    9: "#D93218",
}
MAGNITUDE_COLOR_10_PLUS = "#C03823"


def format_magnitude(magnitude: float) -> str:
    """Format a magnitude with one decimal place.

    Pure function.
    """
    return f"{magnitude:.1f}"


def get_magnitude_color(magnitude: float) -> str:
    """Get the hex colour for a magnitude's circle.

    Pure function.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        Hex colour string
    """
    bucket = max(0, math.floor(magnitude))
    return MAGNITUDE_COLORS.get(bucket, MAGNITUDE_COLOR_10_PLUS)


def split_location(place: str) -> tuple[str, str]:
    """Split USGS place text into (offset, primary location).

    "10km SW of Example" -> ("10km SW of", "Example")
    "Pacific-Antarctic Ridge" -> ("Near the", "Pacific-Antarctic Ridge")

    Pure function.
    """
    if LOCATION_SEPARATOR in place:
        offset, primary = place.split(LOCATION_SEPARATOR, 1)
        return offset + LOCATION_SEPARATOR.rstrip(), primary
    return DEFAULT_LOCATION_OFFSET, place


def _to_datetime(timestamp: int, tz: tzinfo) -> datetime:
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).astimezone(tz)


def format_date(timestamp: int, tz: tzinfo = timezone.utc) -> str:
    """Format an epoch-millisecond timestamp as e.g. "Jan 01, 2021".

    Pure function.
    """
    return _to_datetime(timestamp, tz).strftime("%b %d, %Y")


def format_time(timestamp: int, tz: tzinfo = timezone.utc) -> str:
    """Format an epoch-millisecond timestamp as e.g. "12:00 AM".

    Pure function.
    """
    return _to_datetime(timestamp, tz).strftime("%I:%M %p")


def format_list_item(
    record: EarthquakeRecord,
    tz: tzinfo = timezone.utc,
) -> dict[str, Any]:
    """Format a record into the fields shown by one list row.

    Pure function.

    Args:
        record: Earthquake record to format
        tz: Time zone for date and time text

    Returns:
        Dict of display fields
    """
    offset, primary = split_location(record.location)
    return {
        "magnitude": format_magnitude(record.magnitude),
        "magnitude_color": get_magnitude_color(record.magnitude),
        "location_offset": offset,
        "primary_location": primary,
        "date": format_date(record.timestamp, tz),
        "time": format_time(record.timestamp, tz),
        "url": record.detail_url,
    }


def format_report_lines(
    records: list[EarthquakeRecord],
    tz: tzinfo = timezone.utc,
) -> list[str]:
    """Format records as numbered text rows for terminal output.

    Pure function.

    Args:
        records: Records in display order
        tz: Time zone for date and time text

    Returns:
        One line per record
    """
    lines = []
    for number, record in enumerate(records, start=1):
        item = format_list_item(record, tz)
        lines.append(
            f"{number:>3}. {item['magnitude']:>4}  "
            f"{item['location_offset']:<16} {item['primary_location']:<40} "
            f"{item['date']}  {item['time']}"
        )
    return lines
