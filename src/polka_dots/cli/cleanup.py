"""Cleanup guard for polka-dots.

Wraps a flow and makes sure a failed run never leaves the compose stack
running, unless interactive mode asked to keep it.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from rich.console import Console

from ..logging import get_logger

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Union

    from ..run_config import RunOptions
    from .deploy import DeployFlow
    from .run import RunFlow

    Flow = Union[DeployFlow, RunFlow]

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)


class GuardState(str, Enum):
    """Lifecycle of a guarded flow. Terminal states are never left."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class CleanupGuard:
    """Context manager enforcing teardown when the wrapped flow fails.

    On failure it reports the active mode, then either skips teardown
    (interactive) or issues one best-effort `down`. The original exception
    always propagates unchanged.

    Usage:
        with CleanupGuard(flow, options):
            flow.execute()
    """

    def __init__(self, flow: Flow, options: RunOptions):
        self.flow = flow
        self.options = options
        self.state = GuardState.RUNNING
        self.stop_attempted = False

    def __enter__(self) -> CleanupGuard:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if self.state is not GuardState.RUNNING:
            return False

        if exc_type is None:
            self.state = GuardState.SUCCEEDED
            return False

        # KeyboardInterrupt counts as a failure: the container may be up
        if issubclass(exc_type, (Exception, KeyboardInterrupt)):
            self.state = GuardState.FAILED
            logger.debug("Flow %s failed: %r", self.flow.mode.label, exc)
            self.teardown()
        return False

    def teardown(self) -> None:
        """Decide on and perform the failure-path stop, at most once."""
        err_console.print(f"[red]Testing failed! Current mode: {self.flow.mode.label}[/red]")

        if self.options.interactive:
            console.print(
                "[yellow]Interactive mode enabled; "
                "skipping container stops including on test failure.[/yellow]"
            )
            return

        if self.stop_attempted:
            return
        self.stop_attempted = True
        try:
            stopped = self.flow.compose.stop_quietly(self.flow.context)
        except Exception as e:
            # The stop never replaces the error that got us here
            logger.warning("Stopping containers raised %r", e)
            stopped = False
        if not stopped:
            err_console.print("[red]Failed to stop containers.[/red]")
