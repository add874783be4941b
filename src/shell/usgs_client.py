"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; parsing is in the core module.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

import requests

from src.core.config import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT
from src.core.earthquake import EarthquakeRecord, parse_earthquakes
from src.core.errors import MalformedUrlError, NetworkError


logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Result of fetching a URL.

    Attributes:
        ok: Whether the body was fetched with status 200
        body: Full response text, empty on failure
        status_code: HTTP status code if a response was received
        error: Error message if failed
    """
    ok: bool
    body: str = ""
    status_code: int | None = None
    error: str | None = None


class USGSClient:
    """Client for fetching earthquake data from USGS API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize USGS client.

        Args:
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
            session: HTTP session (created if not provided)
        """
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.session = session or requests.Session()

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) timeout tuple for requests."""
        return (self.connect_timeout, self.read_timeout)

    def _check_url(self, url: str) -> None:
        try:
            parsed = urlparse(url or "")
            parsed.port  # validated lazily; non-numeric ports raise here
        except ValueError as e:
            raise MalformedUrlError(f"Invalid URL {url!r}: {e}") from e
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise MalformedUrlError(f"Not an absolute http(s) URL: {url!r}")

    def _get(self, url: str) -> tuple[str, int]:
        """Perform the GET and read the whole body.

        Raises:
            MalformedUrlError: If the URL cannot be requested
            NetworkError: On connection failure, non-200 status or read error
        """
        self._check_url(url)

        try:
            with self.session.get(url, timeout=self.timeout) as response:
                if response.status_code != 200:
                    raise NetworkError(
                        f"Error response code: {response.status_code}",
                        status_code=response.status_code,
                    )
                body = response.content.decode("utf-8", errors="replace")
                return body, response.status_code
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ) as e:
            raise MalformedUrlError(str(e)) from e
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e

    def fetch(self, url: str) -> FetchResult:
        """Fetch the raw response body for a fully assembled URL.

        This method performs HTTP I/O. Failures are logged and returned
        as an unsuccessful result; they are never raised or retried.

        Args:
            url: Request URL including query parameters

        Returns:
            FetchResult with the body on success
        """
        logger.info("Fetching earthquakes from %s", url)

        try:
            body, status_code = self._get(url)
        except MalformedUrlError as e:
            logger.error("Problem building URL: %s", e)
            return FetchResult(ok=False, error=str(e))
        except NetworkError as e:
            logger.error("Problem retrieving the earthquake JSON results: %s", e)
            return FetchResult(
                ok=False,
                status_code=e.status_code,
                error=str(e),
            )

        logger.info("Fetched %d bytes from USGS", len(body))

        return FetchResult(ok=True, body=body, status_code=status_code)

    def fetch_earthquake_data(self, url: str) -> list[EarthquakeRecord]:
        """Fetch and parse earthquakes in one call.

        Args:
            url: Request URL including query parameters

        Returns:
            Parsed records, empty if fetching or parsing failed
        """
        result = self.fetch(url)
        return parse_earthquakes(result.body)

    def close(self) -> None:
        """Release pooled connections held by the session."""
        self.session.close()
