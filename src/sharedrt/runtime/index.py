"""Grouping discovered version directories into a sorted, immutable index."""

from __future__ import annotations

import os
from typing import Dict, Iterable, Iterator, List, Tuple

from .types import EquivalenceKey, InstallGroup, RawInstall

GroupKey = Tuple[str, int, EquivalenceKey]


def _group_sort_key(group: InstallGroup) -> tuple:
    v = group.version
    root = os.path.dirname(os.path.dirname(group.paths[0])).casefold()
    # A prerelease sorts before the stable release of the same major.minor.patch
    return (group.bitness, v.major, v.minor, v.patch, not v.is_prerelease, v.extra, root)


class FrameworkIndex:
    """Sorted install groups, built once and never mutated.

    Groups are ordered by bitness, then version ascending, so scanning from
    the end visits the newest install of a bitness first.
    """

    __slots__ = ("_groups",)

    def __init__(self, groups: Iterable[InstallGroup] = ()):
        self._groups: Tuple[InstallGroup, ...] = tuple(sorted(groups, key=_group_sort_key))

    @classmethod
    def build(
        cls,
        installs: Iterable[RawInstall],
        primary_family: str,
    ) -> "FrameworkIndex":
        """Group raw installs and sort the groups.

        Installs sharing the install root, bitness and equivalence key end up
        in one group. Member order and the group's version follow input order.

        Args:
            installs: Raw installs from all install roots
            primary_family: Family name that marks a group as a full runtime

        Returns:
            The built index
        """
        primary = primary_family.casefold()
        buckets: Dict[GroupKey, List[RawInstall]] = {}
        for install in installs:
            key = (install.root_key, install.bitness, install.version.equivalence_key)
            buckets.setdefault(key, []).append(install)

        groups = [
            InstallGroup(
                paths=tuple(m.path for m in members),
                bitness=members[0].bitness,
                version=members[0].version,
                has_runtime_app_path=any(m.family.casefold() == primary for m in members),
            )
            for members in buckets.values()
        ]
        return cls(groups)

    @property
    def groups(self) -> Tuple[InstallGroup, ...]:
        return self._groups

    @property
    def has_any_installs(self) -> bool:
        return len(self._groups) != 0

    def bitnesses(self) -> List[int]:
        """Bitnesses that have at least one install, ascending."""
        return sorted({g.bitness for g in self._groups})

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[InstallGroup]:
        return iter(self._groups)

    def __bool__(self) -> bool:
        return self.has_any_installs

    def __repr__(self) -> str:
        return f"<FrameworkIndex groups={len(self._groups)}>"
