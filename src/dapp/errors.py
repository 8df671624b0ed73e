"""
Error types raised by dapp.

Every failure surfaced by the library is an explicit subclass of DappError.
Wrapped causes are kept on ``source`` and chained with ``raise ... from``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class DappError(Exception):
    """Base class for all dapp errors."""


# -----------------------------------------------------------------------------
# Features and formats
# -----------------------------------------------------------------------------


class UnknownFeatureError(DappError, KeyError):
    def __init__(self, feature: str) -> None:
        self.feature = feature
        super().__init__(feature)

    def __str__(self) -> str:
        return f"unknown feature: {self.feature!r}"


class FeatureNotEnabledError(DappError):
    """A capability was used whose libraries are not installed."""

    def __init__(self, feature: str, extra: Optional[str] = None, missing: Optional[str] = None) -> None:
        self.feature = feature
        self.extra = extra
        self.missing = missing
        msg = f"feature {feature!r} is not enabled"
        if missing:
            msg += f" ({missing} is not available)"
        if extra:
            msg += f"; install it with: pip install 'dapp[{extra}]'"
        super().__init__(msg)


class UnknownFormatError(DappError, LookupError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"no config format registered for {key!r}")


# -----------------------------------------------------------------------------
# Configuration loading
# -----------------------------------------------------------------------------


class ConfigError(DappError):
    """Base class for configuration loading errors."""


class FindConfigFileError(ConfigError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"could not find a config file at {str(self.path)!r}")


class FindOptionalConfigFileError(ConfigError):
    def __init__(self, optional_path: Optional[Path] = None) -> None:
        self.optional_path = Path(optional_path) if optional_path is not None else None
        shown = repr(str(self.optional_path)) if self.optional_path is not None else "None"
        super().__init__(f"could not find an optional config file at {shown}")


class ReadConfigFileError(ConfigError):
    def __init__(self, path: Path, source: OSError) -> None:
        self.path = Path(path)
        self.source = source
        super().__init__(f"could not read the config file at {str(self.path)!r}: {source}")


class ReadOptionalConfigFileError(ConfigError):
    def __init__(self, optional_path: Optional[Path], source: OSError) -> None:
        self.optional_path = Path(optional_path) if optional_path is not None else None
        self.source = source
        shown = repr(str(self.optional_path)) if self.optional_path is not None else "None"
        super().__init__(f"could not read the optional config file at {shown}: {source}")


class ParseConfigFileError(ConfigError):
    def __init__(self, path: Path, source: Exception) -> None:
        self.path = Path(path)
        self.source = source
        super().__init__(f"the config file at {str(self.path)!r} has incorrect format: {source}")


class ParseConfigStringError(ConfigError):
    def __init__(self, string: str, source: Exception) -> None:
        self.string = string
        self.source = source
        super().__init__(f"the config string {string!r} has incorrect format: {source}")


# -----------------------------------------------------------------------------
# Paths and logging
# -----------------------------------------------------------------------------


class PathError(DappError):
    """Base class for path resolution errors."""


class InvalidFileNameError(PathError, ValueError):
    """A file name given to an XDG lookup is absolute or escapes the base directory."""

    def __init__(self, name: Path) -> None:
        self.name = Path(name)
        super().__init__(f"file name {str(self.name)!r} must be relative and stay inside the base directory")


class PlaceFileError(PathError):
    def __init__(self, path: Optional[Path], reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = repr(str(self.path)) if self.path is not None else "None"
        super().__init__(f"could not place a file at {where}: {reason}")


class LogSetupError(DappError):
    """Logging could not be configured (e.g. the log file cannot be created)."""
