"""Pytest configuration and fixtures for unit tests."""

from pathlib import Path
from typing import Dict, Iterator

import pytest

from dapp import settings as settings_module
from dapp.log.setup import shutdown_logging


@pytest.fixture
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Dict[str, Path]:
    """Point every XDG variable at a fresh directory under tmp_path."""
    dirs = {
        "XDG_CONFIG_HOME": tmp_path / "config",
        "XDG_DATA_HOME": tmp_path / "data",
        "XDG_STATE_HOME": tmp_path / "state",
        "XDG_CACHE_HOME": tmp_path / "cache",
        "XDG_RUNTIME_DIR": tmp_path / "runtime",
        "XDG_CONFIG_DIRS": tmp_path / "etc-xdg",
        "XDG_DATA_DIRS": tmp_path / "usr-share",
    }
    for name, path in dirs.items():
        monkeypatch.setenv(name, str(path))
    return dirs


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Drop the global settings instance around each test."""
    settings_module._settings = None
    yield
    settings_module._settings = None


@pytest.fixture
def clean_logging() -> Iterator[None]:
    """Remove handlers installed by configure_logging after the test."""
    yield
    shutdown_logging()
