"""polka-dots - Build, launch and test a dotfiles environment in docker-compose."""

from __future__ import annotations

__version__ = "0.1.0"
