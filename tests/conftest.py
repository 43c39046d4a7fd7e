"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Callable

import pytest

from sharedrt.runtime import get_runtime_layout
from sharedrt.runtime.specs import RuntimeLayout
from sharedrt.utils import Environment
from tests.helpers.install_tree import InstallRoot


@pytest.fixture
def layout() -> RuntimeLayout:
    """The default dotnet layout."""
    return get_runtime_layout("dotnet")


@pytest.fixture
def empty_env() -> Environment:
    """An environment with no search paths at all."""
    return Environment({})


@pytest.fixture
def install_root(tmp_path: Path) -> Callable[..., InstallRoot]:
    """Factory for fake install roots under tmp_path.

    Usage:
        root = install_root("x64", bitness=64).add("Microsoft.NETCore.App", ["2.1.0"])
    """

    def factory(name: str, bitness: int = 64) -> InstallRoot:
        return InstallRoot(tmp_path / name).with_launcher(bitness)

    return factory


