"""Provider that discovers installed runtimes once and answers queries."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import semver

from .config import SharedRtConfig
from .utils.environment import Environment
from .runtime.index import FrameworkIndex
from .runtime.resolver import find_version_for_file, resolve
from .runtime.scanner import enumerate_installs, find_base_directories
from .runtime.specs import RuntimeLayout
from .runtime.types import BaseDirectory, InstallGroup, RawInstall, Version

logger = logging.getLogger(__name__)


def discover_installs(
    layout: RuntimeLayout,
    env: Environment,
    extra_dirs: Tuple[str, ...] = (),
    max_workers: int = 1,
) -> List[RawInstall]:
    """Scan every install root and collect its version directories.

    With ``max_workers > 1`` the roots are enumerated on a thread pool; results
    are still returned in install root order.
    """
    base_dirs = find_base_directories(layout, env, extra_dirs)

    def enumerate_base(base: BaseDirectory) -> List[RawInstall]:
        return list(enumerate_installs(base.directory, base.bitness, layout))

    if max_workers > 1 and len(base_dirs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_base = list(executor.map(enumerate_base, base_dirs))
    else:
        per_base = [enumerate_base(base) for base in base_dirs]

    return [install for installs in per_base for install in installs]


class FrameworkPathProvider:
    """Snapshot of the installed shared runtimes.

    Discovery runs once in the constructor; the resulting index never changes.
    Call ``rescan()`` for a fresh snapshot.
    """

    def __init__(
        self,
        config: Optional[SharedRtConfig] = None,
        env: Optional[Environment] = None,
        index: Optional[FrameworkIndex] = None,
    ):
        """Discover installed runtimes.

        Args:
            config: Configuration (defaults are used if omitted)
            env: Environment to read search paths from (the process
                environment if omitted)
            index: Prebuilt index; skips discovery when given
        """
        self.config = config or SharedRtConfig()
        self.layout = self.config.effective_layout()
        if env is None:
            env = Environment.from_process(self.config.env_file_path())
        self.env = env

        if index is None:
            index = self._discover()
        self._index = index

    def _discover(self) -> FrameworkIndex:
        installs = discover_installs(
            self.layout,
            self.env,
            tuple(self.config.discovery.extra_search_dirs),
            self.config.discovery.max_workers,
        )
        index = FrameworkIndex.build(installs, self.layout.primary_family)
        logger.debug(
            f"Found {len(index)} {self.layout.display_name} install groups "
            f"from {len(installs)} version directories"
        )
        return index

    @classmethod
    def from_index(
        cls,
        index: FrameworkIndex,
        env: Optional[Environment] = None,
    ) -> "FrameworkPathProvider":
        """Create a provider around an already built index (no discovery).

        ``env`` is only read by ``rescan()``; without it a rescan sees an
        empty environment and finds only the configured defaults.
        """
        return cls(env=env if env is not None else Environment(), index=index)

    def rescan(self) -> "FrameworkPathProvider":
        """Run discovery again with the same config and environment."""
        return FrameworkPathProvider(self.config, self.env)

    @property
    def index(self) -> FrameworkIndex:
        return self._index

    @property
    def has_any_installs(self) -> bool:
        return self._index.has_any_installs

    def __iter__(self) -> Iterator[InstallGroup]:
        return iter(self._index)

    def resolve_group(self, major: int, minor: int, bitness: int) -> Optional[InstallGroup]:
        """Get the install group that best matches a runtime request."""
        return resolve(self._index.groups, major, minor, bitness)

    def resolve(self, major: int, minor: int, bitness: int) -> Optional[Tuple[str, ...]]:
        """Get the framework directories that best match a runtime request.

        Args:
            major: Requested major version
            minor: Requested minor version
            bitness: Requested bitness (32 or 64)

        Returns:
            Member directories of the best group, or None if nothing is installed

        Raises:
            ValueError: If bitness is not 32 or 64
        """
        group = self.resolve_group(major, minor, bitness)
        return group.paths if group else None

    def resolve_version(self, version: str, bitness: int) -> Optional[Tuple[str, ...]]:
        """Like ``resolve`` but takes a version string such as "3", "3.1" or "3.1.2".

        Raises:
            ValueError: If the version string can't be parsed
        """
        if version is None:
            raise ValueError("version must not be None")
        parsed = semver.Version.parse(version.strip(), optional_minor_and_patch=True)
        return self.resolve(parsed.major, parsed.minor, bitness)

    def version_of(self, filename: Union[str, Path]) -> Optional[Version]:
        """Get the runtime version of the install a file belongs to.

        Returns:
            The owning group's reported version, or None if the file isn't
            inside any discovered framework directory
        """
        return find_version_for_file(self._index.groups, filename)

    def __repr__(self) -> str:
        return f"<FrameworkPathProvider {self.layout.display_name} groups={len(self._index)}>"
