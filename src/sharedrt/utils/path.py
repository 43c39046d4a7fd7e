"""Lexical path helpers used by discovery and reverse lookups."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union


def normalize_dir(path: Union[str, Path]) -> str:
    """Normalize a candidate directory without touching the filesystem.

    Strips surrounding whitespace, trailing separators and ``.``/``..``
    segments. Symlinks are not resolved.

    Args:
        path: Directory as found in an environment variable or config

    Returns:
        Normalized path string (empty if the input was blank)

    Examples:
        >>> normalize_dir("  /opt/dotnet/ ")
        "/opt/dotnet"

        >>> normalize_dir("/opt/tools/../dotnet")
        "/opt/dotnet"
    """
    text = str(path).strip()
    if not text:
        return ""
    return os.path.normpath(text)


def path_key(path: Union[str, Path]) -> str:
    """Case-insensitive identity of a normalized path, for deduplication."""
    return normalize_dir(path).casefold()


def is_file_in_dir(
    directory: Union[str, Path],
    filename: Union[str, Path],
) -> bool:
    """Check whether a file lies somewhere below a directory.

    Both paths are made absolute lexically and compared component by
    component, ignoring case. The directory itself is not "in" itself.

    Args:
        directory: Candidate ancestor directory
        filename: File to test

    Returns:
        True if ``filename`` is strictly below ``directory``

    Examples:
        >>> is_file_in_dir("/dotnet/shared/Microsoft.NETCore.App/2.1.0",
        ...                "/dotnet/shared/Microsoft.NETCore.App/2.1.0/System.dll")
        True

        >>> is_file_in_dir("/dotnet/shared/Microsoft.NETCore.App/2.1.0",
        ...                "/dotnet/shared/Microsoft.NETCore.App/2.1.01/System.dll")
        False
    """
    dir_parts = Path(os.path.abspath(directory)).parts
    file_parts = Path(os.path.abspath(filename)).parts

    if len(file_parts) <= len(dir_parts):
        return False

    return all(
        d.casefold() == f.casefold()
        for d, f in zip(dir_parts, file_parts)
    )
