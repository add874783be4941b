"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates one refresh of the earthquake list: settings
become a request URL, connectivity is checked, the shell fetches, the
core parses, and the caller gets records plus the empty-state message.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass

from src.core.config import Settings, validate_settings
from src.core.earthquake import EarthquakeRecord
from src.core.errors import SettingsError
from src.core.query import build_request_url
from src.loader import EarthquakeLoader
from src.shell.connectivity import is_url_reachable
from src.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


NO_CONNECTION_MESSAGE = "No Internet Connection!"
NO_EARTHQUAKES_MESSAGE = "No earthquakes found."


@dataclass
class ReportResult:
    """Result of one refresh of the earthquake list.

    Attributes:
        earthquakes: Records to display, in service order
        connected: Whether the network was reachable before fetching
    """
    earthquakes: list[EarthquakeRecord]
    connected: bool = True

    @property
    def empty_state(self) -> str | None:
        """Message to show in place of an empty list, None if not empty."""
        if not self.connected:
            return NO_CONNECTION_MESSAGE
        if not self.earthquakes:
            return NO_EARTHQUAKES_MESSAGE
        return None

    @property
    def summary(self) -> str:
        """Human-readable summary of the refresh."""
        if self.empty_state:
            return self.empty_state
        return f"Loaded {len(self.earthquakes)} earthquakes"


def check_settings(settings: Settings) -> None:
    """Validate settings, logging warnings.

    Raises:
        SettingsError: If any critical error is found
    """
    result = validate_settings(settings)

    for warning in result.warnings:
        logger.warning("Settings warning (%s): %s", warning.field, warning.message)

    if not result.valid:
        messages = "; ".join(
            f"{e.field}: {e.message}" for e in result.critical_errors
        )
        raise SettingsError(f"Invalid settings: {messages}", result.critical_errors)


class Orchestrator:
    """Coordinates fetching and parsing for the earthquake list.

    This class wires together:
    - Query builder (settings -> URL)
    - Connectivity check (chooses the empty-state message)
    - USGS client (fetches raw JSON)
    - Loader (runs the fetch in the background)
    """

    def __init__(
        self,
        settings: Settings,
        usgs_client: USGSClient | None = None,
        loader: EarthquakeLoader | None = None,
        connectivity_check: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize orchestrator with settings.

        Args:
            settings: User settings
            usgs_client: USGS client (created if not provided)
            loader: Background loader (created if not provided)
            connectivity_check: Returns True if a URL's host is reachable

        Raises:
            SettingsError: If settings are invalid
        """
        check_settings(settings)

        self.settings = settings
        self.usgs_client = usgs_client or USGSClient(
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
        )
        self.loader = loader or EarthquakeLoader(self.usgs_client)
        self.connectivity_check = connectivity_check or is_url_reachable

    @property
    def request_url(self) -> str:
        """The fully assembled USGS request URL."""
        return build_request_url(self.settings)

    def _is_connected(self) -> bool:
        connected = self.connectivity_check(self.settings.base_url)
        if not connected:
            logger.warning("No network connection, skipping fetch")
        return connected

    def process(self) -> ReportResult:
        """Run one refresh on the calling thread.

        Returns:
            ReportResult with records or an empty state
        """
        if not self._is_connected():
            return ReportResult(earthquakes=[], connected=False)

        records = self.usgs_client.fetch_earthquake_data(self.request_url)
        result = ReportResult(earthquakes=records)

        logger.info("Completed: %s", result.summary)

        return result

    def process_async(
        self,
        callback: Callable[[ReportResult], None],
    ) -> Future:
        """Run one refresh on the background loader.

        The callback receives the ReportResult once, unless the load is
        cancelled first. When the network is down the callback runs
        immediately and no load is started.

        Args:
            callback: Receives the ReportResult

        Returns:
            Future resolving to the list of records
        """
        if not self._is_connected():
            future: Future = Future()
            future.set_result([])
            callback(ReportResult(earthquakes=[], connected=False))
            return future

        def deliver(records: list[EarthquakeRecord]) -> None:
            result = ReportResult(earthquakes=records)
            logger.info("Completed: %s", result.summary)
            callback(result)

        return self.loader.start(self.request_url, deliver)

    def close(self) -> None:
        """Cancel pending work and release connections."""
        self.loader.reset()
