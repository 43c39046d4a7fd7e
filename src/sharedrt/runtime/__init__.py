"""Installed runtime discovery, indexing and best-match resolution."""

from .index import FrameworkIndex
from .resolver import find_version_for_file, resolve
from .specs import RUNTIME_LAYOUTS, RuntimeLayout, get_runtime_layout
from .types import BaseDirectory, InstallGroup, RawInstall, Version
from .version import parse_version_dir

__all__ = [
    "FrameworkIndex",
    "resolve",
    "find_version_for_file",
    "RUNTIME_LAYOUTS",
    "RuntimeLayout",
    "get_runtime_layout",
    "BaseDirectory",
    "InstallGroup",
    "RawInstall",
    "Version",
    "parse_version_dir",
]
