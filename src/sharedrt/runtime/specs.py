"""Declarative install layouts for side-by-side shared runtimes.

This is DATA, not code. To support another runtime, add its layout here.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class RuntimeLayout:
    """How a shared runtime is laid out on disk and where to look for it."""
    display_name: str
    launcher_name: str  # Must exist directly under an install root
    install_dir_name: str  # Joined with the program-files directories
    primary_family: str  # Family that marks a group as a full runtime
    env_vars: List[str] = field(default_factory=list)  # Path lists, in search order
    shared_dir_name: str = "shared"
    program_files_vars: List[str] = field(
        default_factory=lambda: ["ProgramFiles", "ProgramFiles(x86)"]
    )  # 64-bit location first


# Declarative runtime layouts
# To add a new runtime, just add its RuntimeLayout here
RUNTIME_LAYOUTS: Dict[str, RuntimeLayout] = {
    "dotnet": RuntimeLayout(
        display_name=".NET",
        launcher_name="dotnet.exe",
        install_dir_name="dotnet",
        primary_family="Microsoft.NETCore.App",
        # The dotnet host itself only checks the default locations, not PATH
        env_vars=["PATH", "DOTNET_ROOT(x86)", "DOTNET_ROOT"],
    ),
}


def get_runtime_layout(name: str) -> RuntimeLayout:
    """Get the install layout for a runtime.

    Args:
        name: Runtime name (e.g., "dotnet")

    Returns:
        Runtime layout (typed dataclass)

    Raises:
        ValueError: If the runtime is not supported
    """
    if name not in RUNTIME_LAYOUTS:
        supported = ", ".join(RUNTIME_LAYOUTS.keys())
        raise ValueError(
            f"Runtime '{name}' not supported. "
            f"Supported runtimes: {supported}"
        )

    return RUNTIME_LAYOUTS[name]
