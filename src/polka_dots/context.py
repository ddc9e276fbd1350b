"""Process context threaded through the flows.

A ProcessContext carries the working directory and the environment overlay
that external commands run with. Flows derive new contexts instead of
calling os.chdir or writing to os.environ.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path


@dataclass(frozen=True)
class ProcessContext:
    """Working directory and environment overlay for child processes."""

    cwd: Path = field(default_factory=Path.cwd)
    env: dict[str, str] = field(default_factory=dict)

    def chdir(self, path: str | Path) -> ProcessContext:
        """Return a copy running commands in `path`."""
        return replace(self, cwd=Path(path))

    def setenv(self, key: str, value: str) -> ProcessContext:
        """Return a copy with `key` set for child processes."""
        return replace(self, env={**self.env, key: value})

    def environ(self) -> dict[str, str]:
        """Inherited process environment with the overlay applied."""
        merged = dict(os.environ)
        merged.update(self.env)
        return merged
