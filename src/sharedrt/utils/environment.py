"""Injectable source of environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from dotenv import dotenv_values


@dataclass(frozen=True)
class Environment:
    """Snapshot of the environment variables discovery reads.

    Discovery never touches ``os.environ`` directly, so tests can pass
    ``Environment({...})`` and get the same result on any machine.
    """

    variables: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_process(
        cls,
        env_file: Optional[Union[str, Path]] = None,
    ) -> "Environment":
        """Capture the current process environment.

        Args:
            env_file: Optional .env file; its values only fill in variables
                the process doesn't already set

        Returns:
            Environment snapshot
        """
        variables: Dict[str, str] = dict(os.environ)
        if env_file is not None and Path(env_file).is_file():
            # Names compare case-insensitively so ProgramFiles can't shadow PROGRAMFILES
            process_names = {key.casefold() for key in variables}
            for key, value in dotenv_values(env_file).items():
                if value is not None and key.casefold() not in process_names:
                    variables[key] = value
        return cls(variables)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        if name in self.variables:
            return self.variables[name]
        # os.environ upper-cases names on Windows (ProgramFiles -> PROGRAMFILES)
        folded = name.casefold()
        for key, value in self.variables.items():
            if key.casefold() == folded:
                return value
        return default

    def get_path_list(self, name: str) -> List[str]:
        """Split a path-list variable on ``os.pathsep``, dropping empty entries."""
        value = self.get(name) or ""
        return [p for p in value.split(os.pathsep) if p]
