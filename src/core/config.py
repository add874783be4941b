"""Configuration models - Pure data structures.

These are the user settings that shape the USGS request. Loading and
saving (I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from urllib.parse import urlparse


# USGS FDSN Event Web Service query endpoint
USGS_REQUEST_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"

# Sort keys accepted by the service's ``orderby`` parameter
ORDER_BY_CHOICES = ("magnitude", "magnitude-asc", "time", "time-asc")

# Upper bound the service accepts for ``limit``
MAX_LIMIT = 20000

DEFAULT_MIN_MAGNITUDE = "6"
DEFAULT_ORDER_BY = "magnitude"
DEFAULT_LIMIT = 10

# Seconds
DEFAULT_CONNECT_TIMEOUT = 15
DEFAULT_READ_TIMEOUT = 10


@dataclass
class Settings:
    """User settings for the earthquake list.

    min_magnitude is kept as text since it is appended to the request
    URL verbatim, the same way the settings screen stores it.

    Attributes:
        base_url: Service query endpoint
        min_magnitude: Minimum magnitude to request
        order_by: Sort key for the service
        limit: Maximum number of results
        connect_timeout: Connection timeout in seconds
        read_timeout: Read timeout in seconds
    """
    base_url: str = USGS_REQUEST_URL
    min_magnitude: str = DEFAULT_MIN_MAGNITUDE
    order_by: str = DEFAULT_ORDER_BY
    limit: int = DEFAULT_LIMIT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT


@dataclass
class ValidationError:
    """A settings validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating settings.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_min_magnitude(value: str) -> list[ValidationError]:
    """Validate the minimum magnitude setting.

    Pure function.
    """
    try:
        magnitude = float(value)
    except (TypeError, ValueError):
        return [ValidationError(
            field="min_magnitude",
            message=f"Minimum magnitude must be a number, got {value!r}",
        )]

    if magnitude < 0:
        return [ValidationError(
            field="min_magnitude",
            message=f"Minimum magnitude must not be negative, got {magnitude}",
        )]

    if magnitude > 10:
        return [ValidationError(
            field="min_magnitude",
            message=f"Minimum magnitude {magnitude} is above 10, no results expected",
            severity="warning",
        )]

    return []


def validate_base_url(url: str) -> list[ValidationError]:
    """Validate that the base URL is an absolute http(s) URL.

    Pure function.
    """
    try:
        parsed = urlparse(url or "")
        parsed.port  # validated lazily; non-numeric ports raise here
    except ValueError as e:
        return [ValidationError(
            field="base_url",
            message=f"Base URL {url!r} is malformed: {e}",
        )]

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return [ValidationError(
            field="base_url",
            message=f"Base URL must be an absolute http(s) URL, got {url!r}",
        )]
    return []


def validate_settings(settings: Settings) -> ValidationResult:
    """Validate settings for errors and warnings.

    Pure function.

    Args:
        settings: Settings to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_base_url(settings.base_url))
    errors.extend(validate_min_magnitude(settings.min_magnitude))

    if settings.order_by not in ORDER_BY_CHOICES:
        errors.append(ValidationError(
            field="order_by",
            message=(
                f"Unknown sort order {settings.order_by!r}, "
                f"expected one of {', '.join(ORDER_BY_CHOICES)}"
            ),
        ))

    if not 1 <= settings.limit <= MAX_LIMIT:
        errors.append(ValidationError(
            field="limit",
            message=f"Limit must be between 1 and {MAX_LIMIT}, got {settings.limit}",
        ))

    for name in ("connect_timeout", "read_timeout"):
        value = getattr(settings, name)
        if value <= 0:
            errors.append(ValidationError(
                field=name,
                message=f"Timeout must be positive, got {value}",
            ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
