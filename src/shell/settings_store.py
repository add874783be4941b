"""Settings Store - Imperative Shell.

This module handles loading user settings from YAML files and
environment variables, and saving them back. All I/O is contained here.

The Settings model is defined in src/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import Settings
from src.core.errors import SettingsError


logger = logging.getLogger(__name__)


DEFAULT_SETTINGS_PATH = "config/settings.yaml"

# Keys the user may edit from the settings screen
USER_KEYS = ("min_magnitude", "order_by", "limit")

# Environment variable -> settings field
ENV_OVERRIDES = {
    "QUAKE_BASE_URL": "base_url",
    "QUAKE_MIN_MAGNITUDE": "min_magnitude",
    "QUAKE_ORDER_BY": "order_by",
    "QUAKE_LIMIT": "limit",
}


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build settings from a dictionary, filling in defaults.

    Args:
        data: Settings dictionary (e.g. parsed YAML)

    Returns:
        Parsed Settings object

    Raises:
        SettingsError: If a numeric field cannot be converted
    """
    defaults = Settings()
    try:
        return Settings(
            base_url=str(data.get("base_url", defaults.base_url)),
            min_magnitude=str(data.get("min_magnitude", defaults.min_magnitude)),
            order_by=str(data.get("order_by", defaults.order_by)),
            limit=int(data.get("limit", defaults.limit)),
            connect_timeout=float(data.get("connect_timeout", defaults.connect_timeout)),
            read_timeout=float(data.get("read_timeout", defaults.read_timeout)),
        )
    except (TypeError, ValueError) as e:
        raise SettingsError(f"Invalid settings value: {e}") from e


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of data with QUAKE_* environment values applied."""
    merged = dict(data)
    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            logger.debug("Overriding %s from %s", key, env_var)
            merged[key] = value
    return merged


def _resolve_path(path: str | Path | None) -> Path:
    if path is None:
        path = os.environ.get("CONFIG_PATH", DEFAULT_SETTINGS_PATH)
    return Path(path)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file with environment overrides.

    This method performs file I/O.

    Args:
        path: Path to YAML settings file.
              If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Settings object

    Raises:
        yaml.YAMLError: If the settings file is invalid YAML
        SettingsError: If a numeric value cannot be converted
    """
    settings_path = _resolve_path(path)

    logger.info("Loading settings from %s", settings_path)

    data: dict[str, Any] = {}
    if not settings_path.exists():
        logger.warning("Settings file not found: %s, using defaults", settings_path)
    else:
        with open(settings_path, "r") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            logger.warning("Settings file is empty, using defaults")
        else:
            data = loaded

    settings = settings_from_dict(_apply_env_overrides(data))

    logger.info(
        "Loaded settings: minmag=%s, orderby=%s, limit=%d",
        settings.min_magnitude,
        settings.order_by,
        settings.limit,
    )

    return settings


def save_settings(settings: Settings, path: str | Path | None = None) -> Path:
    """Persist the user-editable settings to a YAML file.

    Keys already in the file that are not user-editable are preserved.

    Args:
        settings: Settings to save
        path: Destination file (CONFIG_PATH env var or default if None)

    Returns:
        Path that was written
    """
    settings_path = _resolve_path(path)

    existing: dict[str, Any] = {}
    if settings_path.exists():
        with open(settings_path, "r") as f:
            existing = yaml.safe_load(f) or {}

    for key in USER_KEYS:
        existing[key] = getattr(settings, key)

    settings_path.parent.mkdir(parents=True, exist_ok=True)
    with open(settings_path, "w") as f:
        yaml.safe_dump(existing, f, default_flow_style=False, sort_keys=False)

    logger.info("Saved settings to %s", settings_path)

    return settings_path
