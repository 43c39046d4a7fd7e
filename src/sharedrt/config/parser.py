"""Configuration file parser for sharedrt."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

from ..runtime.specs import RuntimeLayout, get_runtime_layout

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".sharedrt.toml"

# RuntimeLayout fields that [layout] may override
_LAYOUT_FIELDS = {f.name for f in dataclasses.fields(RuntimeLayout)}
# The rest are plain strings
_LAYOUT_LIST_FIELDS = {"env_vars", "program_files_vars"}


@dataclass
class DiscoveryConfig:
    """Where and how to look for install roots."""

    runtime: str = "dotnet"
    extra_search_dirs: List[str] = field(default_factory=list)
    env_file: Optional[str] = None
    max_workers: int = 1


@dataclass
class SharedRtConfig:
    """Complete sharedrt configuration."""

    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    layout_overrides: Dict[str, Any] = field(default_factory=dict)

    # Project root for resolving relative paths
    project_root: Path = field(default_factory=Path.cwd)

    def effective_layout(self) -> RuntimeLayout:
        """Get the runtime layout with [layout] overrides applied.

        Raises:
            ValueError: If the configured runtime is not supported
        """
        layout = get_runtime_layout(self.discovery.runtime)
        if not self.layout_overrides:
            return layout
        return dataclasses.replace(layout, **self.layout_overrides)

    def resolve_path(self, path: str) -> Path:
        """Resolve a config path relative to the project root.

        Supports ${PROJECT_ROOT} - absolute path to project root
        """
        result = Path(path.replace("${PROJECT_ROOT}", str(self.project_root))).expanduser()
        if not result.is_absolute():
            result = self.project_root / result
        return result

    def env_file_path(self) -> Optional[Path]:
        if not self.discovery.env_file:
            return None
        return self.resolve_path(self.discovery.env_file)


def find_config_file(project_path: Path) -> Optional[Path]:
    """Find .sharedrt.toml in project root.

    Args:
        project_path: Root path of the project

    Returns:
        Path to .sharedrt.toml if found, None otherwise
    """
    config_file = Path(project_path) / CONFIG_FILE_NAME
    if config_file.exists():
        return config_file
    return None


def load_config(project_path: Path) -> SharedRtConfig:
    """Load configuration from .sharedrt.toml or use defaults.

    Args:
        project_path: Root path of the project

    Returns:
        SharedRtConfig with loaded or default configuration
    """
    config = SharedRtConfig(project_root=Path(project_path))

    config_file = find_config_file(project_path)
    if not config_file:
        # No config file, use defaults
        return config

    # Parse TOML file
    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config {config_file}: {e}")
        return config

    # Parse discovery config
    discovery_data = _table(data, "discovery", config_file)
    discovery = config.discovery

    runtime = discovery_data.get("runtime", discovery.runtime)
    if _check(runtime, str, "discovery.runtime", config_file):
        discovery.runtime = runtime

    extra_dirs = discovery_data.get("extra_search_dirs", [])
    if _check_str_list(extra_dirs, "discovery.extra_search_dirs", config_file):
        discovery.extra_search_dirs = [str(config.resolve_path(p)) for p in extra_dirs]

    env_file = discovery_data.get("env_file")
    if env_file is None or _check(env_file, str, "discovery.env_file", config_file):
        discovery.env_file = env_file

    max_workers = discovery_data.get("max_workers", discovery.max_workers)
    # bool is an int subclass, but `max_workers = true` is a mistake
    if isinstance(max_workers, bool) or not isinstance(max_workers, int):
        _warn_type("discovery.max_workers", int, max_workers, config_file)
    else:
        discovery.max_workers = max(1, max_workers)

    # Parse layout overrides, ignoring keys RuntimeLayout doesn't have
    for key, value in _table(data, "layout", config_file).items():
        if key not in _LAYOUT_FIELDS:
            logger.warning(f"Ignoring unknown [layout] key '{key}' in {config_file}")
        elif key in _LAYOUT_LIST_FIELDS:
            if _check_str_list(value, f"layout.{key}", config_file):
                config.layout_overrides[key] = list(value)
        elif _check(value, str, f"layout.{key}", config_file):
            config.layout_overrides[key] = value

    return config


def _table(data: Dict[str, Any], name: str, config_file: Path) -> Dict[str, Any]:
    """Get a top-level TOML table, or an empty one if it's missing or not a table."""
    table = data.get(name, {})
    if not isinstance(table, dict):
        logger.warning(f"Ignoring [{name}] in {config_file}: expected a table")
        return {}
    return table


def _warn_type(key: str, expected: type, value: Any, config_file: Path) -> None:
    logger.warning(
        f"Ignoring {key} = {value!r} in {config_file}: "
        f"expected {expected.__name__}, got {type(value).__name__}"
    )


def _check(value: Any, expected: type, key: str, config_file: Path) -> bool:
    if isinstance(value, expected):
        return True
    _warn_type(key, expected, value, config_file)
    return False


def _check_str_list(value: Any, key: str, config_file: Path) -> bool:
    """A bare string is rejected too, rather than iterated character by character."""
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return True
    logger.warning(f"Ignoring {key} = {value!r} in {config_file}: expected a list of strings")
    return False
