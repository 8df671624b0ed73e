"""
Path validity checks.

Single-path checks accept any path-like object or None (None is never valid).
The ``first_*`` / ``all_*`` helpers walk an iterable of such objects lazily,
skip None entries, and yield the original items.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TypeVar, Union

PathLike = Union[str, os.PathLike]
P = TypeVar("P")

Predicate = Callable[[Optional[PathLike]], bool]


def _as_path(p: Optional[PathLike]) -> Optional[Path]:
    if p is None:
        return None
    return Path(p)


def _access(p: Optional[PathLike], mode: int) -> bool:
    path = _as_path(p)
    if path is None:
        return False
    try:
        return os.access(path, mode)
    except (OSError, ValueError):
        return False


def exists(p: Optional[PathLike]) -> bool:
    path = _as_path(p)
    if path is None:
        return False
    try:
        return path.exists()
    except (OSError, ValueError):
        return False


def is_readable(p: Optional[PathLike]) -> bool:
    return _access(p, os.R_OK)


def is_writable(p: Optional[PathLike]) -> bool:
    return _access(p, os.W_OK)


def is_executable(p: Optional[PathLike]) -> bool:
    return _access(p, os.X_OK)


def largest_valid_subset(p: Optional[PathLike]) -> Optional[Path]:
    """Return the innermost existing ancestor of ``p`` (``p`` included), or None."""
    path = _as_path(p)
    if path is None:
        return None
    while not exists(path):
        parent = path.parent
        if parent == path:
            return None
        path = parent
    return path


def is_creatable(p: Optional[PathLike]) -> bool:
    """
    True when the rest of ``p`` could be created: its innermost existing
    ancestor is writable. An existing writable path is creatable as well.
    """
    return is_writable(largest_valid_subset(p))


# -----------------------------------------------------------------------------
# Iterables of paths
# -----------------------------------------------------------------------------


def first_valid_path(paths: Iterable[Optional[P]], predicate: Predicate) -> Optional[P]:
    for p in paths:
        if p is not None and predicate(p):  # type: ignore[arg-type]
            return p
    return None


def all_valid_paths(paths: Iterable[Optional[P]], predicate: Predicate) -> Iterator[P]:
    return (p for p in paths if p is not None and predicate(p))  # type: ignore[arg-type]


def first_existing_path(paths: Iterable[Optional[P]]) -> Optional[P]:
    return first_valid_path(paths, exists)


def first_readable_path(paths: Iterable[Optional[P]]) -> Optional[P]:
    return first_valid_path(paths, is_readable)


def first_writable_path(paths: Iterable[Optional[P]]) -> Optional[P]:
    return first_valid_path(paths, is_writable)


def first_executable_path(paths: Iterable[Optional[P]]) -> Optional[P]:
    return first_valid_path(paths, is_executable)


def first_creatable_path(paths: Iterable[Optional[P]]) -> Optional[P]:
    return first_valid_path(paths, is_creatable)


def all_existing_paths(paths: Iterable[Optional[P]]) -> Iterator[P]:
    return all_valid_paths(paths, exists)


def all_readable_paths(paths: Iterable[Optional[P]]) -> Iterator[P]:
    return all_valid_paths(paths, is_readable)


def all_writable_paths(paths: Iterable[Optional[P]]) -> Iterator[P]:
    return all_valid_paths(paths, is_writable)


def all_executable_paths(paths: Iterable[Optional[P]]) -> Iterator[P]:
    return all_valid_paths(paths, is_executable)


def all_creatable_paths(paths: Iterable[Optional[P]]) -> Iterator[P]:
    return all_valid_paths(paths, is_creatable)
