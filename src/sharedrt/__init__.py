"""Discovery and version resolution for side-by-side shared runtime installs."""

from .config import SharedRtConfig, load_config
from .provider import FrameworkPathProvider
from .runtime import InstallGroup, Version

__version__ = "0.1.0"

__all__ = [
    "FrameworkPathProvider",
    "SharedRtConfig",
    "load_config",
    "InstallGroup",
    "Version",
]
