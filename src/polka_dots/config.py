"""Configuration management for polka-dots.

Settings come from an optional JSON file (~/.polka-dots/config.json) and
are overridden by environment variables.
"""

from __future__ import annotations

import json
import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from rich.console import Console

from .constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_COMPOSE_COMMAND,
    DEFAULT_CONTAINER_BIN,
    DEFAULT_SUDO_PASSWORD,
    ENV_COMPOSE,
    ENV_COMPOSE_FILE,
    ENV_CONTAINER_BIN,
    ENV_REPO,
    ENV_REPO_GIT_RELATIVE,
    ENV_SUDO_PASSWORD,
)
from .errors import ConfigError

console = Console(stderr=True)

# Setting name -> environment variable overriding it
ENV_OVERRIDES: dict[str, str] = {
    "repo_path": ENV_REPO,
    "repo_git_relative": ENV_REPO_GIT_RELATIVE,
    "compose_command": ENV_COMPOSE,
    "compose_file": ENV_COMPOSE_FILE,
    "container_bin": ENV_CONTAINER_BIN,
    "sudo_password": ENV_SUDO_PASSWORD,
}


@dataclass(frozen=True)
class Settings:
    """polka-dots configuration model."""

    # Dotfiles repository root on the host (falls back to home)
    repo_path: str | None = None

    # Forwarded to `docker-compose build` as a build arg when set
    repo_git_relative: str | None = None

    # Compose toolchain
    compose_command: str = DEFAULT_COMPOSE_COMMAND
    compose_file: str | None = None

    # Path of this binary inside the container
    container_bin: str = DEFAULT_CONTAINER_BIN

    # Container user's password, fed to sudo and the bootstrap prompts
    sudo_password: str = DEFAULT_SUDO_PASSWORD

    def compose_argv(self) -> list[str]:
        """Compose executable plus the -f option when a file is configured.

        Raises:
            ConfigError: If compose_command is empty or cannot be split.
        """
        try:
            argv = shlex.split(self.compose_command)
        except ValueError as e:
            raise ConfigError(f"Invalid compose command {self.compose_command!r}: {e}") from e
        if not argv:
            raise ConfigError("Compose command cannot be empty")
        if self.compose_file:
            argv.extend(["-f", self.compose_file])
        return argv


def get_config_dir() -> Path:
    """Get the polka-dots configuration directory."""
    return Path.home() / CONFIG_DIR_NAME


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / CONFIG_FILE_NAME


def _check_types(data: dict[str, object]) -> None:
    """Reject values that are not strings (or null for optional settings).

    Raises:
        ValueError: On the first value of the wrong type.
    """
    for f in fields(Settings):
        if f.name not in data:
            continue
        value = data[f.name]
        if value is None and f.default is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"{f.name} must be a string, got {type(value).__name__}")


def load_config_file(path: Path | None = None) -> Settings:
    """Load settings from the JSON file, or return defaults."""
    config_path = path or get_config_path()

    if config_path.exists():
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            _check_types(data)
            return Settings(**data)
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            console.print(f"[yellow]Warning: Failed to load config ({e}), using defaults[/yellow]")

    return Settings()


def apply_env_overrides(settings: Settings, environ: Mapping[str, str]) -> Settings:
    """Return settings with non-empty environment variables applied."""
    overrides = {
        name: environ[var]
        for name, var in ENV_OVERRIDES.items()
        if environ.get(var)
    }
    return replace(settings, **overrides) if overrides else settings


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> Settings:
    """Load settings from the config file, then the environment."""
    settings = load_config_file(config_path)
    return apply_env_overrides(settings, os.environ if environ is None else environ)
