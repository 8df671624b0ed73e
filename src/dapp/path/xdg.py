"""
Per-application XDG base directories.

Directory roots come from the xdg-base-dirs library and are looked up on every
call, so changes to XDG_* environment variables are picked up. Lookups search
the user directory first and then the system directories; placement always
targets the user directory and creates the parent directories.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import structlog
from xdg_base_dirs import (
    xdg_cache_home,
    xdg_config_dirs,
    xdg_config_home,
    xdg_data_dirs,
    xdg_data_home,
    xdg_runtime_dir,
    xdg_state_home,
)

from dapp.errors import InvalidFileNameError, PlaceFileError
from dapp.path.validity import all_readable_paths, first_readable_path, is_creatable

logger = structlog.get_logger(__name__)


def _check_relative(name: str) -> Path:
    rel = Path(name)
    if rel.is_absolute() or ".." in rel.parts:
        raise InvalidFileNameError(rel)
    return rel


class BaseDirectories:
    """XDG directories for one application, identified by ``prefix``."""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def __repr__(self) -> str:
        return f"BaseDirectories(prefix={self.prefix!r})"

    def _join(self, root: Path) -> Path:
        return root / self.prefix if self.prefix else root

    # -------------------------------------------------------------------------
    # Directories
    # -------------------------------------------------------------------------

    @property
    def config_home(self) -> Path:
        return self._join(xdg_config_home())

    @property
    def data_home(self) -> Path:
        return self._join(xdg_data_home())

    @property
    def state_home(self) -> Path:
        return self._join(xdg_state_home())

    @property
    def cache_home(self) -> Path:
        return self._join(xdg_cache_home())

    @property
    def runtime_dir(self) -> Optional[Path]:
        root = xdg_runtime_dir()
        return self._join(root) if root is not None else None

    @property
    def config_dirs(self) -> List[Path]:
        return [self._join(d) for d in xdg_config_dirs()]

    @property
    def data_dirs(self) -> List[Path]:
        return [self._join(d) for d in xdg_data_dirs()]

    def as_dict(self) -> dict:
        runtime = self.runtime_dir
        return {
            "config_home": str(self.config_home),
            "data_home": str(self.data_home),
            "state_home": str(self.state_home),
            "cache_home": str(self.cache_home),
            "runtime_dir": str(runtime) if runtime is not None else None,
            "config_dirs": [str(d) for d in self.config_dirs],
            "data_dirs": [str(d) for d in self.data_dirs],
        }

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def config_candidates(self, name: str) -> List[Path]:
        rel = _check_relative(name)
        return [d / rel for d in [self.config_home, *self.config_dirs]]

    def data_candidates(self, name: str) -> List[Path]:
        rel = _check_relative(name)
        return [d / rel for d in [self.data_home, *self.data_dirs]]

    def find_config_file(self, name: str) -> Optional[Path]:
        return first_readable_path(p for p in self.config_candidates(name) if p.is_file())

    def find_config_files(self, name: str) -> List[Path]:
        return list(all_readable_paths(p for p in self.config_candidates(name) if p.is_file()))

    def find_data_file(self, name: str) -> Optional[Path]:
        return first_readable_path(p for p in self.data_candidates(name) if p.is_file())

    def find_data_files(self, name: str) -> List[Path]:
        return list(all_readable_paths(p for p in self.data_candidates(name) if p.is_file()))

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def _place(self, root: Optional[Path], name: str) -> Path:
        try:
            rel = _check_relative(name)
        except InvalidFileNameError as e:
            raise PlaceFileError(e.name, "file name must be relative and stay inside the base directory") from e
        if root is None:
            raise PlaceFileError(None, "XDG_RUNTIME_DIR is not set")
        path = root / rel
        if not is_creatable(path.parent):
            raise PlaceFileError(path, "parent directory is not creatable")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PlaceFileError(path, str(e)) from e
        logger.debug("xdg_file_placed", prefix=self.prefix, path=str(path))
        return path

    def place_config_file(self, name: str) -> Path:
        return self._place(self.config_home, name)

    def place_data_file(self, name: str) -> Path:
        return self._place(self.data_home, name)

    def place_state_file(self, name: str) -> Path:
        return self._place(self.state_home, name)

    def place_cache_file(self, name: str) -> Path:
        return self._place(self.cache_home, name)

    def place_runtime_file(self, name: str) -> Path:
        return self._place(self.runtime_dir, name)
