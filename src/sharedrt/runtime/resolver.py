"""Best-match search over a FrameworkIndex."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from ..utils.path import is_file_in_dir
from .types import InstallGroup, Version

BITNESSES = (32, 64)

# Any minor below the requested one ranks after every minor at or above it
_BELOW_REQUESTED = 0x80000000


def minor_distance(requested: int, minor: int) -> int:
    """Distance of ``minor`` from the requested minor version (smaller is better).

    Minors at or above the request rank by how far above they are; minors below
    it all rank after those, closest first.
    """
    if minor >= requested:
        return minor - requested
    return _BELOW_REQUESTED + requested - minor - 1


def best_minor_version(
    requested: int,
    a: InstallGroup,
    b: InstallGroup,
) -> InstallGroup:
    """Pick the group whose minor version is closer to the request.

    On equal distance a stable release beats a prerelease; otherwise ``a`` is kept.
    """
    da = minor_distance(requested, a.version.minor)
    db = minor_distance(requested, b.version.minor)
    if da < db:
        return a
    if db < da:
        return b
    if b.is_prerelease:
        return a
    if a.is_prerelease:
        return b
    return a


def _find_major_minor(
    groups: Sequence[InstallGroup],
    major: int,
    minor: int,
    bitness: int,
) -> Optional[InstallGroup]:
    best_major: Optional[InstallGroup] = None
    exact_minor: Optional[InstallGroup] = None

    for group in reversed(groups):
        if group.bitness != bitness or group.version.major != major:
            continue

        if best_major is None:
            best_major = group
        else:
            best_major = best_minor_version(minor, best_major, group)

        if group.version.minor == minor:
            if group.has_runtime_app_path:
                return group
            if exact_minor is None:
                exact_minor = group

    return exact_minor or best_major


def _find_major(
    groups: Sequence[InstallGroup],
    major: int,
    bitness: int,
) -> Optional[InstallGroup]:
    first_seen: Optional[InstallGroup] = None

    for group in reversed(groups):
        if group.bitness != bitness or group.version.major != major:
            continue
        if group.has_runtime_app_path:
            return group
        if first_seen is None:
            first_seen = group

    return first_seen


def _find_bitness(
    groups: Sequence[InstallGroup],
    bitness: int,
) -> Optional[InstallGroup]:
    first_seen: Optional[InstallGroup] = None

    for group in reversed(groups):
        if group.bitness != bitness:
            continue
        if group.has_runtime_app_path:
            return group
        if first_seen is None:
            first_seen = group

    return first_seen


def resolve(
    groups: Sequence[InstallGroup],
    major: int,
    minor: int,
    bitness: int,
) -> Optional[InstallGroup]:
    """Find the install group that best satisfies a runtime request.

    Tiers, first hit wins (each tries the requested bitness, then the other):
    1. Same major, closest minor (exact minor of the primary family wins outright)
    2. Same major, any minor
    3. Any version

    Args:
        groups: Install groups in index order
        major: Requested major version
        minor: Requested minor version
        bitness: Requested bitness (32 or 64)

    Returns:
        The best group, or None if nothing is installed

    Raises:
        ValueError: If bitness is not 32 or 64
    """
    if bitness not in BITNESSES:
        raise ValueError(f"Bitness must be 32 or 64, got {bitness!r}")
    other = bitness ^ 0x60

    return (
        _find_major_minor(groups, major, minor, bitness)
        or _find_major_minor(groups, major, minor, other)
        or _find_major(groups, major, bitness)
        or _find_major(groups, major, other)
        or _find_bitness(groups, bitness)
        or _find_bitness(groups, other)
    )


def find_version_for_file(
    groups: Sequence[InstallGroup],
    filename: Union[str, Path],
) -> Optional[Version]:
    """Get the runtime version that a file belongs to.

    Args:
        groups: Install groups in index order
        filename: Any file path, e.g. an assembly being loaded

    Returns:
        Reported version of the first group with a member directory above
        ``filename``, or None

    Raises:
        ValueError: If filename is None
    """
    if filename is None:
        raise ValueError("filename must not be None")

    for group in groups:
        for path in group.paths:
            if is_file_in_dir(path, filename):
                return group.reported_version

    return None
