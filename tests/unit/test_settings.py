"""
Unit tests for Pydantic settings: loading from env and from config files,
validation errors for invalid fields, and the global instance.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from dapp.settings import LogSettings, Settings, get_settings, reload_settings


# -----------------------------------------------------------------------------
# Pydantic settings loading from env
# -----------------------------------------------------------------------------


class TestSettingsLoadFromEnv:
    def test_default_settings_load_without_env(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
        assert s.app_name == "dapp"
        assert s.log.level == "INFO"
        assert s.log.format == "console"
        assert s.log.file is None
        assert s.log.rotation == "daily"

    def test_log_level_from_env(self) -> None:
        with patch.dict(os.environ, {"DAPP_LOG_LEVEL": "debug"}):
            log = LogSettings()
        assert log.level == "DEBUG"

    def test_nested_log_from_root_env(self) -> None:
        with patch.dict(os.environ, {"DAPP_APP_NAME": "myapp", "DAPP_LOG__FORMAT": "json"}):
            s = Settings(_env_file=None)
        assert s.app_name == "myapp"
        assert s.log.format == "json"


# -----------------------------------------------------------------------------
# Loading from files
# -----------------------------------------------------------------------------


class TestSettingsFromFile:
    def test_from_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "dapp.yaml"
        f.write_text("app_name: fromfile\nlog:\n  level: warning\n  rotation: hourly\n")
        s = Settings.from_file(f)
        assert s.app_name == "fromfile"
        assert s.log.level == "WARNING"
        assert s.log.rotation == "hourly"

    def test_from_toml(self, tmp_path: Path) -> None:
        f = tmp_path / "dapp.toml"
        f.write_text('[log]\nformat = "json"\n')
        assert Settings.from_file(f).log.format == "json"

    def test_env_fills_fields_the_file_omits(self, tmp_path: Path) -> None:
        f = tmp_path / "dapp.yaml"
        f.write_text("log:\n  level: error\n")
        with patch.dict(os.environ, {"DAPP_LOG_FORMAT": "json"}):
            s = Settings.from_file(f)
        assert s.log.level == "ERROR"
        assert s.log.format == "json"

    def test_nested_env_fills_fields_the_file_omits(self, tmp_path: Path) -> None:
        f = tmp_path / "dapp.yaml"
        f.write_text("log:\n  level: error\n")
        with patch.dict(os.environ, {"DAPP_LOG__FORMAT": "json", "DAPP_LOG__LEVEL": "debug"}):
            s = Settings.from_file(f)
        assert s.log.level == "ERROR"
        assert s.log.format == "json"

    def test_file_app_name_wins_over_env(self, tmp_path: Path) -> None:
        f = tmp_path / "dapp.toml"
        f.write_text('app_name = "fromfile"\n')
        with patch.dict(os.environ, {"DAPP_APP_NAME": "fromenv"}):
            assert Settings.from_file(f).app_name == "fromfile"

    def test_invalid_file_value_raises(self, tmp_path: Path) -> None:
        f = tmp_path / "dapp.yaml"
        f.write_text("log:\n  rotation: weekly\n")
        with pytest.raises(ValidationError):
            Settings.from_file(f)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_file(tmp_path / "missing.yaml")


# -----------------------------------------------------------------------------
# Validation errors for invalid fields
# -----------------------------------------------------------------------------


class TestSettingsValidationErrors:
    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LogSettings(level="LOUD")

    def test_invalid_format(self) -> None:
        with pytest.raises(ValidationError):
            LogSettings(format="xml")

    def test_invalid_rotation(self) -> None:
        with pytest.raises(ValidationError):
            LogSettings(rotation="weekly")

    def test_backup_count_bounds(self) -> None:
        with pytest.raises(ValidationError):
            LogSettings(backup_count=-1)


# -----------------------------------------------------------------------------
# get_settings and reload_settings
# -----------------------------------------------------------------------------


class TestGetSettings:
    def test_get_settings_returns_singleton(self) -> None:
        a = get_settings()
        b = get_settings()
        assert a is b

    def test_reload_settings_creates_new_instance(self) -> None:
        a = get_settings()
        b = reload_settings()
        assert a is not b
        c = get_settings()
        assert c is b
