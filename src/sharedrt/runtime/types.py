"""Data types for installed runtime discovery."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

# (major, minor, patch, is_prerelease)
EquivalenceKey = Tuple[int, int, int, bool]


@dataclass(frozen=True)
class Version:
    """A runtime version parsed from a version directory name.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        extra: Prerelease label (empty for a stable release)
    """

    major: int
    minor: int
    patch: int
    extra: str = ""

    def __post_init__(self) -> None:
        if self.extra is None:
            raise ValueError("Version extra must be a string, not None")

    @property
    def is_prerelease(self) -> bool:
        return bool(self.extra)

    @property
    def equivalence_key(self) -> EquivalenceKey:
        """Key under which all prerelease labels of a release compare equal.

        Prerelease shared frameworks of one release don't share build numbers, eg.:
            shared/Microsoft.AspNetCore.App/3.0.0-preview-18579-0056
            shared/Microsoft.NETCore.App/3.0.0-preview-27216-02
        """
        return (self.major, self.minor, self.patch, self.is_prerelease)

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.extra}" if self.extra else base


@dataclass(frozen=True)
class BaseDirectory:
    """A confirmed install root containing the runtime launcher."""

    directory: str
    bitness: int


@dataclass(frozen=True)
class RawInstall:
    """One version directory found under an install root.

    Attributes:
        path: Full path to the version directory
        bitness: 32 or 64, taken from the install root's launcher
        version: Version parsed from the directory name
    """

    path: str
    bitness: int
    version: Version

    @property
    def family(self) -> str:
        """Name of the framework family directory (eg. Microsoft.NETCore.App)."""
        return os.path.basename(os.path.dirname(self.path))

    @property
    def root_key(self) -> str:
        """Case-insensitive identity of the install root's shared directory."""
        return os.path.dirname(os.path.dirname(self.path)).casefold()


@dataclass(frozen=True)
class InstallGroup:
    """Equivalent version directories of one install root.

    Attributes:
        paths: Member version directories, in discovery order
        bitness: 32 or 64
        version: Version of the first member
        has_runtime_app_path: Whether any member belongs to the primary family
    """

    paths: Tuple[str, ...]
    bitness: int
    version: Version
    has_runtime_app_path: bool

    @property
    def reported_version(self) -> Version:
        return self.version

    @property
    def is_prerelease(self) -> bool:
        return self.version.is_prerelease

    def __repr__(self) -> str:
        core_note = " (core)" if self.has_runtime_app_path else ""
        return (
            f"<InstallGroup {self.version} {self.bitness}-bit"
            f"{core_note} paths={len(self.paths)}>"
        )
