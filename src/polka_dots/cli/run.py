"""Run operations for polka-dots.

Container side: runs the dotfiles bootstrap with canned answers.
"""

from __future__ import annotations

from rich.console import Console

from ..compose import Compose
from ..config import Settings
from ..constants import (
    BOOTSTRAP_AFFIRMATION,
    BOOTSTRAP_COMMAND,
    BOOTSTRAP_CONFIRMATION_COUNT,
    DEBCONF_SELECTION,
    ENV_SCRIPT,
)
from ..context import ProcessContext
from ..errors import BootstrapError
from ..paths import home_dir
from ..process import run_command
from ..run_config import Mode

console = Console(highlight=False)

SUDO_DEBCONF_COMMAND = ("sudo", "-kS", "debconf-set-selections")


class RunFlow:
    """Bootstrap test run in the current environment."""

    mode = Mode.RUN

    def __init__(
        self,
        settings: Settings,
        context: ProcessContext | None = None,
        compose: Compose | None = None,
    ):
        self.settings = settings
        self.context = context or ProcessContext()
        self.compose = compose or Compose(settings)

    def debconf_input(self) -> str:
        """Password for `sudo -S`, then the debconf selection."""
        return f"{self.settings.sudo_password}\n{DEBCONF_SELECTION}\n"

    def bootstrap_answers(self) -> str:
        """Affirmation followed by the repeated confirmation token."""
        answers = [BOOTSTRAP_AFFIRMATION]
        answers.extend([self.settings.sudo_password] * BOOTSTRAP_CONFIRMATION_COUNT)
        return "".join(f"{answer}\n" for answer in answers)

    def execute(self) -> None:
        self.context = self.context.chdir(home_dir()).setenv(ENV_SCRIPT, "true")

        console.print("Starting a test...")
        run_command(
            SUDO_DEBCONF_COMMAND,
            self.context,
            stdin=self.debconf_input(),
            error_cls=BootstrapError,
        )
        run_command(
            BOOTSTRAP_COMMAND,
            self.context,
            stdin=self.bootstrap_answers(),
            error_cls=BootstrapError,
        )
