"""Version directory name parsing."""

import re
from typing import Optional

from .types import Version

_RELEASE_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")
_PRERELEASE_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)-(.+)$")

# Components are 32-bit signed; anything larger parses as 0
_MAX_COMPONENT = 0x7FFFFFFF


def _parse_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        return 0
    return value if value <= _MAX_COMPONENT else 0


def parse_version_dir(name: str) -> Optional[Version]:
    """Parse a version directory name such as ``3.1.7`` or ``3.0.0-preview-27216-02``.

    Returns:
        The parsed Version, or None if the name is not a version directory
    """
    match = _RELEASE_RE.match(name)
    if match:
        major, minor, patch = match.groups()
        return Version(_parse_int(major), _parse_int(minor), _parse_int(patch), "")

    match = _PRERELEASE_RE.match(name)
    if match:
        major, minor, patch, extra = match.groups()
        return Version(_parse_int(major), _parse_int(minor), _parse_int(patch), extra)

    return None

