"""USGS request construction - Pure functions.

Builds the fully assembled query URL handed to the fetcher.
"""

from urllib.parse import urlencode

from src.core.config import Settings


def build_query_params(settings: Settings) -> list[tuple[str, str]]:
    """Build query parameters for the USGS request.

    Pure function. Order matches what the service documents.

    Args:
        settings: User settings

    Returns:
        Ordered list of (name, value) pairs
    """
    return [
        ("format", "geojson"),
        ("limit", str(settings.limit)),
        ("minmag", str(settings.min_magnitude)),
        ("orderby", settings.order_by),
    ]


def build_request_url(settings: Settings) -> str:
    """Build the full USGS request URL from settings.

    Pure function.

    Args:
        settings: User settings

    Returns:
        Base URL with encoded query string appended
    """
    separator = "&" if "?" in settings.base_url else "?"
    return settings.base_url + separator + urlencode(build_query_params(settings))
