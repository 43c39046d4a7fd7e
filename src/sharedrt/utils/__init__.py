"""Utility modules (environment, path)."""

from .environment import Environment
from .path import is_file_in_dir, normalize_dir, path_key

__all__ = [
    "Environment",
    "is_file_in_dir",
    "normalize_dir",
    "path_key",
]
