"""Configuration management for sharedrt."""

from .parser import (
    DiscoveryConfig,
    SharedRtConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "DiscoveryConfig",
    "SharedRtConfig",
    "find_config_file",
    "load_config",
]
