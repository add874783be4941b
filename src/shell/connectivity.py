"""Connectivity check - Imperative Shell.

Answers "is the network up?" before a fetch is attempted, so the UI can
tell "no internet connection" apart from "no earthquakes found".
"""

import logging
import socket
from urllib.parse import urlparse


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 3


def is_network_available(
    host: str,
    port: int = 443,
    timeout: float = DEFAULT_TIMEOUT,
) -> bool:
    """Check whether a TCP connection to host:port can be opened.

    This method performs network I/O.

    Args:
        host: Hostname to reach
        port: TCP port
        timeout: Connection timeout in seconds

    Returns:
        True if the connection succeeded
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.warning("Network unavailable (%s:%d): %s", host, port, e)
        return False


def is_url_reachable(url: str, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """Check connectivity to the host of a URL.

    Args:
        url: Absolute URL whose host should be reachable
        timeout: Connection timeout in seconds

    Returns:
        True if the URL's host accepts connections
    """
    try:
        parsed = urlparse(url)
        port = parsed.port or (80 if parsed.scheme == "http" else 443)
    except ValueError as e:
        logger.warning("Cannot check connectivity for %r: %s", url, e)
        return False
    if not parsed.hostname:
        return False
    return is_network_available(parsed.hostname, port, timeout)
