"""Deploy operations for polka-dots.

Host side: builds the compose stack, starts it, runs the tests inside the
container and stops it again.
"""

from __future__ import annotations

from rich.console import Console

from ..compose import Compose, exec_in_container
from ..config import Settings
from ..constants import ENV_BIN, ENV_REPO_GIT_RELATIVE
from ..context import ProcessContext
from ..logging import get_logger
from ..paths import current_executable, resolve_repo_root
from ..run_config import Mode, RunOptions

console = Console(highlight=False)
logger = get_logger(__name__)


class DeployFlow:
    """Build-start-test-stop cycle for the compose stack.

    `context` always holds the context of the step that ran last, so the
    cleanup guard stops the stack from the same directory and environment.
    """

    mode = Mode.DEPLOY

    def __init__(
        self,
        settings: Settings,
        options: RunOptions,
        context: ProcessContext | None = None,
        compose: Compose | None = None,
    ):
        self.settings = settings
        self.options = options
        self.context = context or ProcessContext()
        self.compose = compose or Compose(settings)

    def build_args(self) -> dict[str, str]:
        """Build args forwarded to `docker-compose build`."""
        if self.settings.repo_git_relative:
            return {ENV_REPO_GIT_RELATIVE: self.settings.repo_git_relative}
        return {}

    def testing_command(self) -> str:
        """Shell command that runs the tests inside the container."""
        return f"{self.settings.container_bin} {Mode.RUN.value}"

    def execute(self) -> None:
        """Run every deploy step in order, stopping at the first failure."""
        self.context = self.context.chdir(resolve_repo_root(self.settings.repo_path))

        # Read by docker-compose.yml to mount this binary into the container
        binary_path = current_executable()
        self.context = self.context.setenv(ENV_BIN, str(binary_path))
        logger.debug("Publishing %s=%s", ENV_BIN, binary_path)

        if self.options.skip_build:
            logger.debug("Skipping image build")
        else:
            self.compose.build(self.context, self.build_args())

        console.print("Starting container...")
        self.compose.up(self.context)

        container_id = self.compose.container_id(self.context)
        logger.debug("Container id: %s", container_id)

        console.print("Running tests...")
        exec_in_container(self.context, container_id, self.testing_command())

        if self.options.interactive:
            console.print("[yellow]Interactive mode enabled; skipping container stops.[/yellow]")
        else:
            self.compose.down(self.context)
