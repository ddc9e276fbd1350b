"""Logging for polka-dots.

User-facing progress goes through rich consoles; this module covers the
debug trace, which is mostly the external commands a run spawns:

    2026-01-01 12:00:00 [DEBUG] polka_dots.process: $ docker-compose up -d (in /home/me/dots)
    2026-01-01 12:00:04 [DEBUG] polka_dots.process: $ docker-compose up -d -> exit 0

Enable it with `polka-dots --debug` or POLKA_DOTS_DEBUG=1.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

from .constants import ENV_DEBUG

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

ROOT_LOGGER_NAME = "polka_dots"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CommandFormatter(logging.Formatter):
    """Appends the working directory or exit status of command trace records."""

    def __init__(self, debug: bool = False):
        super().__init__(LOG_FORMAT_DEBUG if debug else LOG_FORMAT, datefmt=DATE_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:  # noqa: N802
        line = super().formatMessage(record)
        cwd = getattr(record, "cwd", None)
        if cwd is not None:
            line = f"{line} (in {cwd})"
        returncode = getattr(record, "returncode", None)
        if returncode is not None:
            line = f"{line} -> exit {returncode}"
        return line


def _debug_requested() -> bool:
    return os.environ.get(ENV_DEBUG, "").lower() in ("1", "true", "yes")


def _init_logging() -> None:
    """Attach the stderr handler to the polka_dots logger once."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if root_logger.handlers:
        return

    debug = _debug_requested()
    level = logging.DEBUG if debug else logging.WARNING
    root_logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(CommandFormatter(debug))
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, placed under the polka_dots namespace."""
    _init_logging()
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_debug(enabled: bool = True) -> None:
    """Switch the polka_dots logger and its handlers between DEBUG and WARNING."""
    _init_logging()
    level = logging.DEBUG if enabled else logging.WARNING
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)
        handler.setFormatter(CommandFormatter(enabled))


def log_command(logger: logging.Logger, cmd: Sequence[str] | str, cwd: Path | str) -> None:
    """Trace a command about to start in `cwd`."""
    logger.debug("$ %s", _render(cmd), extra={"cwd": str(cwd)})


def log_command_result(logger: logging.Logger, cmd: Sequence[str] | str, returncode: int) -> None:
    """Trace a finished command's exit status."""
    logger.debug("$ %s", _render(cmd), extra={"returncode": returncode})


def _render(cmd: Sequence[str] | str) -> str:
    return cmd if isinstance(cmd, str) else " ".join(cmd)
