"""
Layered configuration.

A Configuration is a pydantic model whose assignable fields are optional.
Sources are applied in priority order: each source only fills the fields
that are still None, so the first source to provide a value wins. A typical
application chains them::

    cfg = (
        AppConfig.new()
        .env()
        .optional_filepath(args.config)
        .xdg("myapp", "config.yaml")
        .ensure_loaded()
    )

Once any source contributed, the configuration is marked loaded; otherwise
``ensure_loaded`` falls back to ``default()``.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Self, Union

import structlog
from pydantic import BaseModel, ConfigDict, PrivateAttr

from dapp.config.formats import FormatLike, format_for_path, get_format
from dapp.errors import (
    DappError,
    FindConfigFileError,
    FindOptionalConfigFileError,
    ParseConfigFileError,
    ParseConfigStringError,
    ReadConfigFileError,
    ReadOptionalConfigFileError,
)
from dapp.path.xdg import BaseDirectories

logger = structlog.get_logger(__name__)

PathArg = Union[str, os.PathLike]


def _decode_env_value(value: str) -> Any:
    """Decode JSON arrays/objects so list and nested fields can come from env."""
    stripped = value.strip()
    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    return value


def _detached(value: Any) -> Any:
    """Copy a merged value so later merges never reach back into the source."""
    if isinstance(value, BaseModel):
        return value.model_copy(deep=True)
    return copy.deepcopy(value)


class Configuration(BaseModel):
    """
    Base class for application configuration.

    Subclasses declare their assignable fields as ``Optional[...] = None`` and
    override ``default()`` to supply fallback values. ``env_prefix`` selects
    the environment variables read by ``env()``.
    """

    model_config = ConfigDict(extra="ignore")

    env_prefix: ClassVar[str] = ""

    _loaded: bool = PrivateAttr(default=False)

    @classmethod
    def new(cls) -> Self:
        """Return an instance with every assignable field unset."""
        return cls()

    @classmethod
    def default(cls) -> Self:
        """Return the fallback used by ``ensure_loaded``. Override in subclasses."""
        return cls()

    # -------------------------------------------------------------------------
    # Loaded state
    # -------------------------------------------------------------------------

    def set_loaded(self) -> None:
        self._loaded = True

    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> Self:
        if not self.is_loaded():
            defaults = type(self).default()
            for name in type(self).model_fields:
                setattr(self, name, getattr(defaults, name))
        return self

    # -------------------------------------------------------------------------
    # Merging
    # -------------------------------------------------------------------------

    def _fill_from(self, other: BaseModel) -> bool:
        filled = False
        for name in type(self).model_fields:
            theirs = getattr(other, name, None)
            if theirs is None:
                continue
            mine = getattr(self, name)
            if mine is None:
                setattr(self, name, _detached(theirs))
                filled = True
            elif isinstance(mine, Configuration) and isinstance(theirs, BaseModel):
                filled = mine._fill_from(theirs) or filled
        return filled

    def config(self, other: BaseModel) -> Self:
        """Fill unset fields from ``other``; fields already set are kept."""
        if self._fill_from(other):
            self.set_loaded()
        return self

    def optional_config(self, other: Optional[BaseModel]) -> Self:
        if other is not None:
            self.config(other)
        return self

    def env(self) -> Self:
        """Fill unset fields from ``<env_prefix><FIELD>`` environment variables."""
        raw: Dict[str, Any] = {}
        for name in type(self).model_fields:
            if getattr(self, name) is not None:
                continue
            value = os.environ.get(f"{self.env_prefix}{name}".upper())
            if value is not None:
                raw[name] = _decode_env_value(value)
        if not raw:
            return self
        logger.debug("config_env_loaded", config=type(self).__name__, fields=sorted(raw))
        return self.config(type(self).model_validate(raw))

    # -------------------------------------------------------------------------
    # Text sources
    # -------------------------------------------------------------------------

    def _parse(self, text: str, fmt: FormatLike) -> Self:
        data = get_format(fmt).loads(text)
        return type(self).model_validate(data)

    def string(self, config_string: str, fmt: FormatLike) -> Self:
        """Merge a config string in the given format."""
        try:
            other = self._parse(config_string, fmt)
        except DappError:
            raise
        except Exception as e:
            raise ParseConfigStringError(config_string, e) from e
        self.config(other)
        self.set_loaded()
        return self

    def _load_file(self, path: Path, fmt: Optional[FormatLike], optional: bool) -> Self:
        selector = get_format(fmt) if fmt is not None else format_for_path(path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            if optional:
                raise ReadOptionalConfigFileError(path, e) from e
            raise ReadConfigFileError(path, e) from e
        try:
            other = self._parse(raw.decode("utf-8"), selector)
        except DappError:
            raise
        except Exception as e:
            raise ParseConfigFileError(path, e) from e
        self.config(other)
        self.set_loaded()
        logger.debug("config_file_loaded", config=type(self).__name__, path=str(path), format=selector.name)
        return self

    def filepath(self, config_filepath: PathArg, fmt: Optional[FormatLike] = None) -> Self:
        """
        Merge the config file at ``config_filepath``. A missing file is ignored;
        an unreadable or malformed one raises. Without ``fmt`` the format is
        chosen from the file suffix.
        """
        path = Path(config_filepath)
        if not path.exists():
            return self
        return self._load_file(path, fmt, optional=False)

    def optional_filepath(self, config_filepath: Optional[PathArg], fmt: Optional[FormatLike] = None) -> Self:
        if config_filepath is None:
            return self
        path = Path(config_filepath)
        if not path.exists():
            return self
        return self._load_file(path, fmt, optional=True)

    def try_filepath(self, config_filepath: PathArg, fmt: Optional[FormatLike] = None) -> Self:
        """Like ``filepath`` but a missing file raises FindConfigFileError."""
        path = Path(config_filepath)
        if not path.exists():
            raise FindConfigFileError(path)
        return self._load_file(path, fmt, optional=False)

    def try_optional_filepath(
        self, config_filepath: Optional[PathArg], fmt: Optional[FormatLike] = None
    ) -> Self:
        if config_filepath is None:
            raise FindOptionalConfigFileError(None)
        path = Path(config_filepath)
        if not path.exists():
            raise FindOptionalConfigFileError(path)
        return self._load_file(path, fmt, optional=True)

    def xdg(self, app_name: str, filename: str, fmt: Optional[FormatLike] = None) -> Self:
        """Merge the first readable ``filename`` on the app's XDG config search path."""
        path = BaseDirectories(app_name).find_config_file(filename)
        if path is None:
            return self
        return self._load_file(path, fmt, optional=False)
