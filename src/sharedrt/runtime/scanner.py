"""Install root discovery and version directory enumeration."""

import logging
import os
from typing import Iterable, Iterator, List, Set

from ..utils.environment import Environment
from ..utils.path import normalize_dir, path_key
from .pe import get_pe_bitness
from .specs import RuntimeLayout
from .types import BaseDirectory, RawInstall
from .version import parse_version_dir

logger = logging.getLogger(__name__)


def _program_files_dirs(layout: RuntimeLayout, env: Environment) -> List[str]:
    """Well-known install parents, 64-bit location first."""
    values = [env.get(name) or "" for name in layout.program_files_vars]
    prog_dir, prog_dir_x86 = (values + ["", ""])[:2]

    # A 32-bit process sees the x86 directory in both variables
    if prog_dir and prog_dir_x86 and path_key(prog_dir) == path_key(prog_dir_x86):
        prog_dir = os.path.join(os.path.dirname(normalize_dir(prog_dir)), "Program Files")

    return [d for d in (prog_dir, prog_dir_x86) if d]


def iter_candidate_dirs(
    layout: RuntimeLayout,
    env: Environment,
    extra_dirs: Iterable[str] = (),
) -> Iterator[str]:
    """Yield raw candidate install roots in search order.

    Order:
    1. Each entry of every path-list variable in ``layout.env_vars``
    2. Configured extra directories
    3. ``<program files>/<install_dir_name>`` (64-bit, then 32-bit)
    """
    for var in layout.env_vars:
        yield from env.get_path_list(var)

    yield from extra_dirs

    for parent in _program_files_dirs(layout, env):
        yield os.path.join(parent, layout.install_dir_name)


def find_base_directories(
    layout: RuntimeLayout,
    env: Environment,
    extra_dirs: Iterable[str] = (),
) -> List[BaseDirectory]:
    """Find install roots that contain a launcher of known bitness.

    Best effort: any candidate that can't be probed is skipped.

    Args:
        layout: Runtime layout to look for
        env: Environment to read search paths from
        extra_dirs: Additional directories to probe after the env vars

    Returns:
        Confirmed install roots, in candidate order
    """
    seen: Set[str] = set()
    found: List[BaseDirectory] = []

    for candidate in iter_candidate_dirs(layout, env, extra_dirs):
        path = normalize_dir(candidate)
        if not path or not os.path.isdir(path):
            continue

        key = path_key(path)
        if key in seen:
            continue
        seen.add(key)

        launcher = os.path.join(path, layout.launcher_name)
        if not os.path.isfile(launcher):
            continue

        try:
            bitness = get_pe_bitness(launcher)
        except OSError as e:
            logger.debug(f"Skipping {path}: can't read {layout.launcher_name}: {e}")
            continue

        if bitness is None:
            logger.debug(f"Skipping {path}: {layout.launcher_name} is not a PE32/PE32+ image")
            continue

        found.append(BaseDirectory(directory=path, bitness=bitness))

    return found


def _list_dirs(directory: str) -> List[str]:
    """Sorted child directories, or an empty list if the listing fails."""
    try:
        with os.scandir(directory) as entries:
            names = [e.name for e in entries if e.is_dir()]
    except OSError as e:
        logger.debug(f"Can't list {directory}: {e}")
        return []
    return [os.path.join(directory, name) for name in sorted(names)]


def enumerate_installs(
    base_dir: str,
    bitness: int,
    layout: RuntimeLayout,
) -> Iterator[RawInstall]:
    """Yield every version directory under ``<base>/shared/<family>/``.

    Args:
        base_dir: Confirmed install root
        bitness: Bitness of the install root's launcher
        layout: Runtime layout (for the shared directory name)
    """
    shared_dir = os.path.join(base_dir, layout.shared_dir_name)
    if not os.path.isdir(shared_dir):
        return

    for family_dir in _list_dirs(shared_dir):
        for version_dir in _list_dirs(family_dir):
            version = parse_version_dir(os.path.basename(version_dir))
            if version is None:
                continue
            yield RawInstall(path=version_dir, bitness=bitness, version=version)
