"""CLI package for polka-dots.

This package contains the CLI commands and supporting modules:
- deploy: Host-side build/start/test/stop flow
- run: In-container bootstrap test flow
- cleanup: Cleanup guard that stops the stack when a flow fails

Lazy Import Strategy:
    Flow modules are loaded only by the command that needs them, so
    --help/--version stay fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from .. import __version__
from ..config import load_settings
from ..errors import DispatchError, PolkaDotsError
from ..logging import set_debug
from ..run_config import RunOptions

if TYPE_CHECKING:
    from ..config import Settings
    from .cleanup import Flow

__all__ = ["cli", "execute_guarded"]


def _abort(error: PolkaDotsError) -> NoReturn:
    """Exit with status 1, showing the error message."""
    raise click.ClickException(str(error)) from error


def execute_guarded(flow: Flow, options: RunOptions) -> None:
    """Run a flow inside the cleanup guard.

    Raises:
        click.ClickException: With the original error's message on failure.
    """
    from .cleanup import CleanupGuard

    try:
        with CleanupGuard(flow, options):
            flow.execute()
    except PolkaDotsError as e:
        _abort(e)


@click.group(invoke_without_command=True)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
@click.version_option(version=__version__, prog_name="polka-dots")
def cli(ctx: click.Context, debug: bool) -> None:
    """polka-dots - Test dotfiles in a docker-compose container."""
    if debug:
        set_debug(True)

    if ctx.invoked_subcommand is None:
        _abort(DispatchError("No command specified"))

    ctx.obj = load_settings()


@cli.command("deploy")
@click.option("--skip-build", is_flag=True, help="Skip `docker-compose build`.")
@click.option("--interactive", "-i", is_flag=True, help="Don't stop the container at the end.")
@click.pass_obj
def deploy_cmd(settings: Settings, skip_build: bool, interactive: bool) -> None:
    """Mount a build of polka-dots via docker-compose and run tests.

    Requires running polka-dots as a submodule of dotfiles.
    """
    from .deploy import DeployFlow

    options = RunOptions.from_cli(skip_build=skip_build, interactive=interactive)
    execute_guarded(DeployFlow(settings, options), options)


@cli.command("run")
@click.pass_obj
def run_cmd(settings: Settings) -> None:
    """Run tests. Should be used where dotfiles are installed."""
    from .run import RunFlow

    execute_guarded(RunFlow(settings), RunOptions())


if __name__ == "__main__":  # pragma: no cover
    cli()
