"""
dapp: helpers for considerate applications.

One import surface over three capabilities: XDG-aware path handling
(``dapp.path``), layered configuration from env, strings and files in
several formats (``dapp.config``), and structured log output
(``dapp.log``). Which text formats are usable depends on the installed
extras; see ``dapp.features``.
"""

from importlib.metadata import PackageNotFoundError, version

from dapp.config import (
    ConfigFormat,
    Configuration,
    HjsonFormat,
    Json5Format,
    JsonFormat,
    TomlFormat,
    YamlFormat,
    register_format,
)
from dapp.errors import (
    ConfigError,
    DappError,
    FeatureNotEnabledError,
    FindConfigFileError,
    FindOptionalConfigFileError,
    InvalidFileNameError,
    LogSetupError,
    ParseConfigFileError,
    ParseConfigStringError,
    PathError,
    PlaceFileError,
    ReadConfigFileError,
    ReadOptionalConfigFileError,
    UnknownFeatureError,
    UnknownFormatError,
)
from dapp.features import DEFAULT_FEATURES, enabled_features, is_enabled, require
from dapp.log import configure_logging, get_logger, shutdown_logging
from dapp.path import BaseDirectories

try:
    __version__ = version("dapp")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "BaseDirectories",
    "ConfigError",
    "ConfigFormat",
    "Configuration",
    "DEFAULT_FEATURES",
    "DappError",
    "FeatureNotEnabledError",
    "FindConfigFileError",
    "FindOptionalConfigFileError",
    "HjsonFormat",
    "Json5Format",
    "InvalidFileNameError",
    "JsonFormat",
    "LogSetupError",
    "ParseConfigFileError",
    "ParseConfigStringError",
    "PathError",
    "PlaceFileError",
    "ReadConfigFileError",
    "ReadOptionalConfigFileError",
    "TomlFormat",
    "UnknownFeatureError",
    "UnknownFormatError",
    "YamlFormat",
    "__version__",
    "configure_logging",
    "enabled_features",
    "get_logger",
    "is_enabled",
    "register_format",
    "require",
    "shutdown_logging",
]
