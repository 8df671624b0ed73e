"""Filesystem helpers: path validity checks and XDG base directories."""

from dapp.path.validity import (
    all_creatable_paths,
    all_executable_paths,
    all_existing_paths,
    all_readable_paths,
    all_valid_paths,
    all_writable_paths,
    exists,
    first_creatable_path,
    first_executable_path,
    first_existing_path,
    first_readable_path,
    first_valid_path,
    first_writable_path,
    is_creatable,
    is_executable,
    is_readable,
    is_writable,
    largest_valid_subset,
)
from dapp.path.xdg import BaseDirectories

__all__ = [
    "BaseDirectories",
    "all_creatable_paths",
    "all_executable_paths",
    "all_existing_paths",
    "all_readable_paths",
    "all_valid_paths",
    "all_writable_paths",
    "exists",
    "first_creatable_path",
    "first_executable_path",
    "first_existing_path",
    "first_readable_path",
    "first_valid_path",
    "first_writable_path",
    "is_creatable",
    "is_executable",
    "is_readable",
    "is_writable",
    "largest_valid_subset",
]
