"""Tests for the Settings Store module.

Tests settings loading from YAML files and environment variables,
and saving them back.
"""

import os
from unittest.mock import patch

import pytest
import yaml

from src.core.config import Settings, USGS_REQUEST_URL
from src.core.errors import SettingsError
from src.shell.settings_store import (
    load_settings,
    save_settings,
    settings_from_dict,
)


@pytest.fixture
def clean_env():
    """Run with no QUAKE_* or CONFIG_PATH variables set."""
    env = {
        k: v for k, v in os.environ.items()
        if not k.startswith("QUAKE_") and k != "CONFIG_PATH"
    }
    with patch.dict(os.environ, env, clear=True):
        yield


class TestSettingsFromDict:
    """Tests for settings_from_dict function."""

    def test_empty_dict_gives_defaults(self):
        assert settings_from_dict({}) == Settings()

    def test_parses_all_fields(self):
        data = {
            "base_url": "https://example.com/query",
            "min_magnitude": 4.5,
            "order_by": "time",
            "limit": "25",
            "connect_timeout": 5,
            "read_timeout": "3.5",
        }

        settings = settings_from_dict(data)

        assert settings == Settings(
            base_url="https://example.com/query",
            min_magnitude="4.5",
            order_by="time",
            limit=25,
            connect_timeout=5.0,
            read_timeout=3.5,
        )

    def test_invalid_limit_raises_settings_error(self):
        with pytest.raises(SettingsError, match="Invalid settings value"):
            settings_from_dict({"limit": "ten"})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_returns_defaults(self, tmp_path, clean_env):
        settings = load_settings(tmp_path / "missing.yaml")
        assert settings == Settings()

    def test_empty_file_returns_defaults(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text("")

        assert load_settings(path) == Settings()

    def test_loads_yaml(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text("min_magnitude: '3'\norder_by: time\nlimit: 50\n")

        settings = load_settings(path)

        assert settings.min_magnitude == "3"
        assert settings.order_by == "time"
        assert settings.limit == 50
        assert settings.base_url == USGS_REQUEST_URL

    def test_uses_config_path_env(self, tmp_path, clean_env):
        path = tmp_path / "env-settings.yaml"
        path.write_text("limit: 7\n")

        with patch.dict(os.environ, {"CONFIG_PATH": str(path)}):
            settings = load_settings()

        assert settings.limit == 7

    def test_env_overrides_file(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text("min_magnitude: '3'\norder_by: time\n")

        with patch.dict(os.environ, {
            "QUAKE_MIN_MAGNITUDE": "5.5",
            "QUAKE_LIMIT": "12",
        }):
            settings = load_settings(path)

        assert settings.min_magnitude == "5.5"
        assert settings.limit == 12
        assert settings.order_by == "time"

    def test_invalid_yaml_raises(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text("limit: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_settings(path)


class TestSaveSettings:
    """Tests for save_settings function."""

    def test_writes_user_keys(self, tmp_path, clean_env):
        path = tmp_path / "config" / "settings.yaml"

        save_settings(Settings(min_magnitude="4", order_by="time", limit=20), path)

        data = yaml.safe_load(path.read_text())
        assert data == {"min_magnitude": "4", "order_by": "time", "limit": 20}

    def test_preserves_other_keys(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text("base_url: https://example.com/query\nmin_magnitude: '6'\n")

        save_settings(Settings(min_magnitude="2"), path)

        data = yaml.safe_load(path.read_text())
        assert data["base_url"] == "https://example.com/query"
        assert data["min_magnitude"] == "2"

    def test_round_trip_through_load(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        original = Settings(min_magnitude="3.5", order_by="time-asc", limit=15)

        save_settings(original, path)

        assert load_settings(path) == original
