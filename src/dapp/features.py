"""
Feature table for the dapp facade.

Each capability (path, config, log, serde, and one feature per text format)
names the features it builds on and the third-party modules it imports.
A feature is enabled when its whole dependency closure can be imported; a
format feature additionally needs a codec registered under its name.
"""

from __future__ import annotations

import importlib.util
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import structlog

from dapp.errors import FeatureNotEnabledError, UnknownFeatureError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Feature:
    name: str
    description: str
    requires: Tuple[str, ...] = ()
    modules: Tuple[str, ...] = ()
    extra: Optional[str] = None
    is_format: bool = False


FEATURES: Dict[str, Feature] = {
    f.name: f
    for f in (
        Feature("path", "filesystem/XDG path resolution", modules=("xdg_base_dirs",)),
        Feature("config", "structured configuration loading", requires=("path",), modules=("pydantic",)),
        Feature("log", "structured log emission", requires=("path",), modules=("structlog",)),
        Feature("serde", "generic deserialize dispatch", modules=("pydantic",)),
        Feature("yaml", "YAML config format", requires=("serde",), modules=("yaml",), is_format=True),
        Feature("json", "JSON config format", requires=("serde",), modules=("json",), is_format=True),
        Feature("toml", "TOML config format", requires=("serde",), modules=("tomllib",), is_format=True),
        Feature("ron", "RON config format (codec registered by the application)", requires=("serde",), is_format=True),
        Feature("json5", "JSON5 config format", requires=("serde",), modules=("json5",), extra="json5", is_format=True),
        Feature("hjson", "HJSON config format", requires=("serde",), modules=("hjson",), extra="hjson", is_format=True),
    )
}

DEFAULT_FEATURES: Tuple[str, ...] = ("config", "log", "serde", "yaml", "json", "toml", "ron")


def get_feature(name: str) -> Feature:
    try:
        return FEATURES[name]
    except KeyError:
        raise UnknownFeatureError(name) from None


def resolve(names: Iterable[str]) -> FrozenSet[str]:
    """Return the given features together with everything they require."""
    seen: set[str] = set()
    stack: List[str] = list(names)
    while stack:
        name = stack.pop()
        if name in seen:
            continue
        feature = get_feature(name)
        seen.add(name)
        stack.extend(feature.requires)
    return frozenset(seen)


@lru_cache(maxsize=None)
def _module_available(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False


def _missing(name: str) -> Optional[str]:
    """Name the first thing that keeps ``name`` from being enabled, or None."""
    for dep in sorted(resolve([name])):
        feature = FEATURES[dep]
        for module in feature.modules:
            if not _module_available(module):
                return f"module {module!r}"
        if feature.is_format:
            from dapp.config.formats import is_registered

            if not is_registered(dep):
                return f"a {dep} codec"
    return None


def is_enabled(name: str) -> bool:
    return _missing(name) is None


def require(name: str) -> Feature:
    """Return the feature, or raise FeatureNotEnabledError if it cannot be used."""
    feature = get_feature(name)
    missing = _missing(name)
    if missing is not None:
        logger.debug("feature_not_enabled", feature=name, missing=missing)
        raise FeatureNotEnabledError(name, extra=feature.extra, missing=missing)
    return feature


def enabled_features() -> List[str]:
    return [name for name in FEATURES if is_enabled(name)]


def feature_table() -> List[Dict[str, object]]:
    """Rows describing every feature and whether it is usable right now."""
    rows: List[Dict[str, object]] = []
    for name, feature in FEATURES.items():
        missing = _missing(name)
        rows.append(
            {
                "feature": name,
                "description": feature.description,
                "requires": list(feature.requires),
                "default": name in DEFAULT_FEATURES,
                "enabled": missing is None,
                "missing": missing,
                "extra": feature.extra,
            }
        )
    return rows
