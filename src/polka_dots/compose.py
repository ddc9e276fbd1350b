"""docker-compose operations for polka-dots.

Thin wrappers around the compose toolchain, separated from the flow logic.
Every call takes the ProcessContext it runs in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import DOCKER_COMMAND
from .errors import ComposeError, ContainerError, PolkaDotsError
from .logging import get_logger
from .process import run_command

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .config import Settings
    from .context import ProcessContext

logger = get_logger(__name__)


class Compose:
    """The compose stack described by the configured compose file."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def command(self, *args: str) -> list[str]:
        """Full compose command line for `args`."""
        return [*self.settings.compose_argv(), *args]

    def build(self, context: ProcessContext, build_args: Mapping[str, str] | None = None) -> None:
        """Build the stack's images, passing each build arg through."""
        args = ["build"]
        for key, value in (build_args or {}).items():
            args.extend(["--build-arg", f"{key}={value}"])
        run_command(self.command(*args), context, error_cls=ComposeError)

    def up(self, context: ProcessContext) -> None:
        """Start the stack detached."""
        run_command(self.command("up", "-d"), context, error_cls=ComposeError)

    def container_id(self, context: ProcessContext) -> str:
        """Id of the stack's running container.

        Raises:
            ContainerError: If `ps -q` fails or lists no container.
        """
        result = run_command(
            self.command("ps", "-q"),
            context,
            capture_output=True,
            error_cls=ContainerError,
        )
        ids = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not ids:
            raise ContainerError("No running container found for the compose stack")
        if len(ids) > 1:
            logger.warning("Multiple containers running, using %s", ids[0])
        return ids[0]

    def down(self, context: ProcessContext) -> None:
        """Stop and remove the stack's containers."""
        run_command(self.command("down"), context, error_cls=ComposeError)

    def stop_quietly(self, context: ProcessContext) -> bool:
        """Best-effort `down`.

        Returns:
            True if the stack was stopped, False otherwise.
        """
        try:
            self.down(context)
        except PolkaDotsError as e:
            logger.warning("Failed to stop containers: %s", e)
            return False
        return True


def exec_in_container(context: ProcessContext, container_id: str, shell_command: str) -> None:
    """Run `shell_command` through bash inside a running container.

    Raises:
        ContainerError: If the command exits non-zero.
    """
    run_command(
        [DOCKER_COMMAND, "exec", "-t", container_id, "bash", "-c", shell_command],
        context,
        error_cls=ContainerError,
    )
