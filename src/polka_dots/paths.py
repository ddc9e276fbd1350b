"""Path resolution for polka-dots.

Resolves the home directory, the dotfiles repository root and the path of
the running executable. Failures here are unrecoverable startup errors.
"""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

from .errors import EnvironmentResolutionError


def home_dir() -> Path:
    """Get the user's home directory.

    Raises:
        EnvironmentResolutionError: If the home directory cannot be determined.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise EnvironmentResolutionError(f"Cannot determine home directory: {e}") from e


def resolve_repo_root(repo_path: str | None) -> Path:
    """Resolve the dotfiles repository root.

    Args:
        repo_path: Configured repository path; the home directory if unset.

    Returns:
        Absolute path of an existing directory.

    Raises:
        EnvironmentResolutionError: If the path does not exist or is not a directory.
    """
    root = Path(os.path.expanduser(repo_path)) if repo_path else home_dir()
    if not root.is_dir():
        raise EnvironmentResolutionError(f"Repository root is not a directory: {root}")
    return root.resolve()


def current_executable(argv0: str | None = None) -> Path:
    """Get the absolute path of the running polka-dots executable.

    Uses argv[0] as given (console script or direct path), looking it up on
    PATH when it is a bare name.

    Raises:
        EnvironmentResolutionError: If the executable cannot be located.
    """
    name = argv0 if argv0 is not None else sys.argv[0]
    if not name:
        raise EnvironmentResolutionError("Cannot determine current executable: empty argv[0]")

    if os.sep in name or (os.altsep and os.altsep in name):
        candidate = Path(name)
    else:
        found = shutil.which(name)
        candidate = Path(found) if found else Path(name)

    if not candidate.is_file():
        raise EnvironmentResolutionError(f"Cannot determine current executable: {name}")
    return candidate.resolve()
