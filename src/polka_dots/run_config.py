"""Run configuration for polka-dots.

Bundles the selected mode and CLI options into immutable values that the
flows and the cleanup guard share.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(str, Enum):
    """Operating mode, selected once per invocation from the subcommand."""

    DEPLOY = "deploy"  # Host side: build, start, test, stop
    RUN = "run"  # Container side: run the bootstrap

    @property
    def label(self) -> str:
        """Human-readable name used in diagnostics."""
        return self.value.capitalize()

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class RunOptions:
    """Per-invocation options.

    Use frozen=True so flows and the cleanup guard see the same snapshot.
    """

    # Omit `docker-compose build`
    skip_build: bool = False

    # Leave the container running after success and failure
    interactive: bool = False

    @classmethod
    def from_cli(cls, *, skip_build: bool = False, interactive: bool = False) -> RunOptions:
        """Create RunOptions from CLI arguments."""
        return cls(skip_build=skip_build, interactive=interactive)
