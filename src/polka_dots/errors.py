"""Unified exception hierarchy for polka-dots.

All custom exceptions inherit from PolkaDotsError for consistent error handling.
The cleanup guard intercepts these, and the CLI converts them to user-friendly
messages via click.ClickException.

Dependency direction:
    This module has NO internal dependencies (leaf module).
    It may be imported by: all other polka_dots modules.
    It should NOT import from any other polka_dots modules.
"""

from __future__ import annotations

from collections.abc import Sequence


class PolkaDotsError(Exception):
    """Base exception for all polka-dots errors.

    All polka-dots-specific exceptions should inherit from this class.
    This enables consistent error handling in the cleanup guard and CLI.
    """


class DispatchError(PolkaDotsError):
    """Argument or dispatch errors.

    Examples:
        - No subcommand given
    """


class ConfigError(PolkaDotsError):
    """Configuration-related errors.

    Examples:
        - Invalid compose command (empty or unbalanced quotes)
    """


class EnvironmentResolutionError(PolkaDotsError):
    """Raised when a required path cannot be determined.

    Examples:
        - Home directory cannot be resolved
        - Repository root does not exist
        - Current executable path cannot be found
    """


class CommandError(PolkaDotsError):
    """An external command failed or could not be spawned.

    Base class for all external-process failures.
    """

    def __init__(self, message: str, *, cmd: Sequence[str] = (), returncode: int | None = None):
        super().__init__(message)
        self.cmd = list(cmd)
        self.returncode = returncode


class CommandNotFoundError(CommandError):
    """Raised when the executable is not installed or not in PATH."""


class ComposeError(CommandError):
    """Raised when a docker-compose operation fails."""


class ContainerError(ComposeError):
    """Raised when container operations fail (lookup, exec)."""


class BootstrapError(CommandError):
    """Raised when a step of the in-container test run fails."""
