"""Background Loader - runs one fetch off the caller's thread.

The owning screen (CLI, HTTP handler, or a UI) starts a load and gets the
result through a single-shot callback or the returned future. At most one
load is in flight. Tearing the owner down calls reset(), which cancels the
pending load so its result is never delivered.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from src.core.earthquake import EarthquakeRecord
from src.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


LoadCallback = Callable[[list[EarthquakeRecord]], None]


class CancellationToken:
    """Cancellation flag shared between the owner and one load."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class EarthquakeLoader:
    """Runs fetch-then-parse on a single background worker.

    Cancellation is cooperative: the token is checked before the fetch
    starts and again before delivery. A blocking read already in progress
    is not interrupted, but its result is discarded.
    """

    def __init__(self, client: USGSClient | None = None) -> None:
        """Initialize loader.

        Args:
            client: USGS client (created if not provided)
        """
        self.client = client or USGSClient()
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="earthquake-loader",
        )
        self._lock = threading.Lock()
        self._future: Future | None = None
        self._token: CancellationToken | None = None
        self._closed = False

    @property
    def is_loading(self) -> bool:
        """True while a load is queued or running."""
        with self._lock:
            return self._future is not None and not self._future.done()

    def start(self, url: str, callback: LoadCallback | None = None) -> Future:
        """Start a load unless one is already in flight.

        Args:
            url: Fully assembled request URL
            callback: Called once with the records if not cancelled

        Returns:
            Future resolving to the records (empty if cancelled)

        Raises:
            RuntimeError: If the loader has been reset
        """
        with self._lock:
            self._ensure_open()
            if self._future is not None and not self._future.done():
                logger.debug("Load already in flight, reusing it")
                return self._future
            return self._submit(url, callback)

    def restart(self, url: str, callback: LoadCallback | None = None) -> Future:
        """Cancel any in-flight load and start a new one.

        Raises:
            RuntimeError: If the loader has been reset
        """
        with self._lock:
            self._ensure_open()
            self._cancel_current()
            return self._submit(url, callback)

    def cancel(self) -> None:
        """Cancel the in-flight load, if any."""
        with self._lock:
            self._cancel_current()

    def reset(self) -> None:
        """Tear down: cancel the pending load and release resources."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._cancel_current()

        logger.debug("Resetting earthquake loader")
        self._executor.shutdown(wait=False)
        self.client.close()

    def __enter__(self) -> "EarthquakeLoader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.reset()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Loader has been reset")

    def _cancel_current(self) -> None:
        if self._token is not None and not self._token.cancelled:
            logger.info("Cancelling in-flight earthquake load")
            self._token.cancel()

    def _submit(self, url: str, callback: LoadCallback | None) -> Future:
        token = CancellationToken()
        self._token = token
        self._future = self._executor.submit(self._load, url, token, callback)
        return self._future

    def _load(
        self,
        url: str,
        token: CancellationToken,
        callback: LoadCallback | None,
    ) -> list[EarthquakeRecord]:
        if token.cancelled:
            logger.debug("Load cancelled before fetch")
            return []

        records = self.client.fetch_earthquake_data(url)

        with self._lock:
            cancelled = token.cancelled
        if cancelled:
            logger.info("Discarding %d earthquakes from cancelled load", len(records))
            return []

        if callback is not None:
            try:
                callback(records)
            except Exception:
                logger.exception("Earthquake load callback failed")

        return records
