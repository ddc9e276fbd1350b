"""Pytest configuration and fixtures for polka-dots tests.

This module ensures the polka_dots package is importable during tests
without requiring installation, and provides a recording stand-in for
subprocess.run so no external command is ever spawned.
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for development testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

CONTAINER_ID = "abc123def456"

ENV_VARS = (
    "DOTS_REPO",
    "DOTS_REPO_GIT_RELATIVE",
    "POLKA_DOTS_COMPOSE",
    "POLKA_DOTS_COMPOSE_FILE",
    "POLKA_DOTS_CONTAINER_BIN",
    "POLKA_DOTS_SUDO_PASSWORD",
    "POLKA_DOTS_BIN",
    "SCRIPT",
)


@dataclass
class RecordedCall:
    """One intercepted subprocess.run call."""

    cmd: list[str]
    kwargs: dict[str, Any]


@dataclass
class FakeSubprocess:
    """Records commands and answers them by command prefix."""

    calls: list[RecordedCall] = field(default_factory=list)
    returncodes: dict[tuple[str, ...], int] = field(default_factory=dict)
    outputs: dict[tuple[str, ...], str] = field(
        default_factory=lambda: {("docker-compose", "ps", "-q"): f"{CONTAINER_ID}\n"}
    )
    missing: set[str] = field(default_factory=set)

    def fail_on(self, *prefix: str, returncode: int = 1) -> None:
        """Make commands starting with `prefix` exit with `returncode`."""
        self.returncodes[prefix] = returncode

    def _lookup(self, table: dict[tuple[str, ...], Any], cmd: list[str], default: Any) -> Any:
        for prefix, value in table.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                return value
        return default

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        cmd = list(cmd)
        self.calls.append(RecordedCall(cmd, kwargs))
        if cmd[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        return subprocess.CompletedProcess(
            cmd,
            self._lookup(self.returncodes, cmd, 0),
            stdout=self._lookup(self.outputs, cmd, ""),
            stderr="",
        )

    @property
    def commands(self) -> list[list[str]]:
        return [call.cmd for call in self.calls]

    def count(self, *prefix: str) -> int:
        """Number of recorded commands starting with `prefix`."""
        return sum(1 for cmd in self.commands if tuple(cmd[: len(prefix)]) == prefix)

    def call_for(self, *prefix: str) -> RecordedCall:
        """First recorded call starting with `prefix`."""
        for call in self.calls:
            if tuple(call.cmd[: len(prefix)]) == prefix:
                return call
        raise AssertionError(f"No call starting with {prefix!r} in {self.commands!r}")


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeSubprocess:
    """Replace subprocess.run with a recorder."""
    fake = FakeSubprocess()
    monkeypatch.setattr("polka_dots.process.subprocess.run", fake)
    return fake


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, Path]:
    """Fresh home and dotfiles repository with no polka-dots settings."""
    home = tmp_path / "home"
    repo = tmp_path / "dots"
    home.mkdir()
    repo.mkdir()
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("DOTS_REPO", str(repo))
    return {"home": home, "repo": repo}
