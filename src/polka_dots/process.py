"""External command execution for polka-dots.

Every external process (docker-compose, docker, sudo, yadm) is started
through run_command so that failures surface as PolkaDotsError subclasses
and every invocation is logged the same way.
"""

from __future__ import annotations

import shlex
import subprocess
from typing import TYPE_CHECKING

from .errors import CommandError, CommandNotFoundError
from .logging import get_logger, log_command, log_command_result

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .context import ProcessContext

logger = get_logger(__name__)

__all__ = [
    "CommandError",
    "CommandNotFoundError",
    "format_command",
    "run_command",
]


def format_command(cmd: Sequence[str]) -> str:
    """Render a command for messages, quoted as a shell would need it."""
    return shlex.join(cmd)


def run_command(
    cmd: Sequence[str],
    context: ProcessContext,
    *,
    stdin: str | None = None,
    capture_output: bool = False,
    check: bool = True,
    error_cls: type[CommandError] = CommandError,
) -> subprocess.CompletedProcess[str]:
    """Run an external command in the given context.

    The argument list and stdin payload are passed through unchanged; no
    shell is involved. Output is streamed to the terminal unless captured.

    Args:
        cmd: Command and arguments.
        context: Working directory and environment overlay to run with.
        stdin: Text written to the command's standard input.
        capture_output: Capture stdout/stderr if True.
        check: Raise `error_cls` on non-zero exit.
        error_cls: CommandError subclass raised on non-zero exit.

    Returns:
        CompletedProcess with command result.

    Raises:
        CommandNotFoundError: If the executable cannot be started.
        CommandError: If check=True and the command exits non-zero.
    """
    cmd_str = format_command(cmd)
    log_command(logger, cmd_str, context.cwd)
    try:
        result = subprocess.run(
            list(cmd),
            input=stdin,
            capture_output=capture_output,
            text=True,
            check=False,
            cwd=context.cwd,
            env=context.environ(),
        )
    except FileNotFoundError as e:
        if not context.cwd.is_dir():
            logger.error("Working directory does not exist: %s", context.cwd)
            raise CommandError(
                f"Working directory does not exist: {context.cwd}. Command: {cmd_str}", cmd=cmd
            ) from e
        logger.error("Executable not found: %s", cmd_str)
        raise CommandNotFoundError(
            f"{cmd[0]} not found in PATH. Command: {cmd_str}", cmd=cmd
        ) from e
    except OSError as e:
        logger.error("Failed to start command %s: %s", cmd_str, e)
        raise CommandNotFoundError(f"Could not start {cmd_str}: {e}", cmd=cmd) from e

    log_command_result(logger, cmd_str, result.returncode)
    if check and result.returncode != 0:
        raise error_cls(
            f"Command failed with exit code {result.returncode}: {cmd_str}",
            cmd=cmd,
            returncode=result.returncode,
        )
    return result
