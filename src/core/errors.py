"""Error taxonomy for fetching and parsing earthquake data.

These are raised inside the shell and core, then absorbed at the
fetch/parse boundaries and converted into empty results. Nothing
here should reach the presentation layer.
"""


class QuakeReportError(Exception):
    """Base class for all QuakeReport errors."""


class NetworkError(QuakeReportError):
    """Connection failure, timeout, non-200 status or read I/O error.

    Attributes:
        status_code: HTTP status if a response was received
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedUrlError(QuakeReportError):
    """The request URL could not be used to open a connection."""


class ParseError(QuakeReportError):
    """The response body is not valid JSON or lacks the expected shape."""


class SettingsError(QuakeReportError):
    """User settings failed validation.

    Attributes:
        errors: Validation errors that caused the failure
    """

    def __init__(self, message: str, errors: list | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
