"""Layered configuration loading from env, strings, files and XDG dirs."""

from dapp.config.configuration import Configuration
from dapp.config.formats import (
    ConfigFormat,
    HjsonFormat,
    Json5Format,
    JsonFormat,
    TomlFormat,
    YamlFormat,
    format_for_path,
    get_format,
    is_registered,
    register_format,
    registered_formats,
    unregister_format,
)

__all__ = [
    "ConfigFormat",
    "Configuration",
    "HjsonFormat",
    "Json5Format",
    "JsonFormat",
    "TomlFormat",
    "YamlFormat",
    "format_for_path",
    "get_format",
    "is_registered",
    "register_format",
    "registered_formats",
    "unregister_format",
]
