"""
Config format selectors.

A selector turns config text into a mapping that pydantic can validate into a
Configuration. Built-in selectors cover YAML, JSON, TOML, JSON5 and HJSON;
applications register their own (for example a RON codec) with
``register_format``. Selectors are looked up by name or by file suffix.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Dict, Mapping, Optional, Tuple, Type, Union

from dapp.errors import UnknownFormatError


class ConfigFormat(ABC):
    """Base class for format selectors."""

    name: str = ""
    suffixes: Tuple[str, ...] = ()
    # Feature checked before the codec is imported; None for custom selectors.
    feature: Optional[str] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Decode ``text`` with the underlying codec."""

    def loads(self, text: str) -> Dict[str, Any]:
        if self.feature is not None:
            from dapp.features import require

            require(self.feature)
        data = self.parse(text)
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ValueError(
                f"top-level {self.name or 'config'} value must be a mapping, got {type(data).__name__}"
            )
        return dict(data)

    def load(self, stream: IO[str]) -> Dict[str, Any]:
        return self.loads(stream.read())


class YamlFormat(ConfigFormat):
    name = "yaml"
    suffixes = (".yaml", ".yml")
    feature = "yaml"

    def parse(self, text: str) -> Any:
        import yaml

        return yaml.safe_load(text)


class JsonFormat(ConfigFormat):
    name = "json"
    suffixes = (".json",)
    feature = "json"

    def parse(self, text: str) -> Any:
        if not text.strip():
            return None
        return json.loads(text)


class TomlFormat(ConfigFormat):
    name = "toml"
    suffixes = (".toml",)
    feature = "toml"

    def parse(self, text: str) -> Any:
        import tomllib

        return tomllib.loads(text)


class Json5Format(ConfigFormat):
    name = "json5"
    suffixes = (".json5",)
    feature = "json5"

    def parse(self, text: str) -> Any:
        import json5

        if not text.strip():
            return None
        return json5.loads(text)


class HjsonFormat(ConfigFormat):
    name = "hjson"
    suffixes = (".hjson",)
    feature = "hjson"

    def parse(self, text: str) -> Any:
        import hjson

        if not text.strip():
            return None
        return hjson.loads(text)


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

FormatLike = Union[str, ConfigFormat, Type[ConfigFormat]]

_by_name: Dict[str, ConfigFormat] = {}
_by_suffix: Dict[str, ConfigFormat] = {}


def _key(key: str) -> str:
    return key.strip().lower().lstrip(".")


def register_format(fmt: Union[ConfigFormat, Type[ConfigFormat]]) -> ConfigFormat:
    """Register a selector under its name and suffixes, replacing earlier ones."""
    if isinstance(fmt, type):
        fmt = fmt()
    if not fmt.name:
        raise ValueError("config format must have a name")
    _by_name[_key(fmt.name)] = fmt
    for suffix in fmt.suffixes:
        _by_suffix[_key(suffix)] = fmt
    return fmt


def unregister_format(name: str) -> None:
    fmt = _by_name.pop(_key(name), None)
    if fmt is None:
        return
    for suffix in fmt.suffixes:
        if _by_suffix.get(_key(suffix)) is fmt:
            del _by_suffix[_key(suffix)]


def is_registered(name: str) -> bool:
    return _key(name) in _by_name


def registered_formats() -> Dict[str, ConfigFormat]:
    return dict(_by_name)


def get_format(fmt: FormatLike) -> ConfigFormat:
    """Resolve a selector instance, selector class, or registered name."""
    if isinstance(fmt, ConfigFormat):
        return fmt
    if isinstance(fmt, type) and issubclass(fmt, ConfigFormat):
        return fmt()
    try:
        return _by_name[_key(fmt)]
    except KeyError:
        raise UnknownFormatError(fmt) from None


def format_for_path(path: Union[str, Path]) -> ConfigFormat:
    suffix = Path(path).suffix
    if not suffix:
        raise UnknownFormatError(str(path))
    try:
        return _by_suffix[_key(suffix)]
    except KeyError:
        raise UnknownFormatError(suffix) from None


for _builtin in (YamlFormat, JsonFormat, TomlFormat, Json5Format, HjsonFormat):
    register_format(_builtin)
del _builtin
