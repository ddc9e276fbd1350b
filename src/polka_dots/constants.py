"""Constants module for polka-dots.

Environment variable names and fixed command inputs are defined here (SSOT).
"""

from __future__ import annotations

# === Environment variables (consumed) ===
ENV_REPO = "DOTS_REPO"  # Dotfiles repository root on the host
ENV_REPO_GIT_RELATIVE = "DOTS_REPO_GIT_RELATIVE"  # Passed through as a build arg
ENV_COMPOSE = "POLKA_DOTS_COMPOSE"  # Compose executable, e.g. "docker compose"
ENV_COMPOSE_FILE = "POLKA_DOTS_COMPOSE_FILE"
ENV_CONTAINER_BIN = "POLKA_DOTS_CONTAINER_BIN"
ENV_SUDO_PASSWORD = "POLKA_DOTS_SUDO_PASSWORD"
ENV_DEBUG = "POLKA_DOTS_DEBUG"

# === Environment variables (produced) ===
ENV_BIN = "POLKA_DOTS_BIN"  # Read by docker-compose.yml to mount this binary
ENV_SCRIPT = "SCRIPT"  # Marks a non-interactive scripted run for the bootstrap

# === Defaults ===
DEFAULT_COMPOSE_COMMAND = "docker-compose"
DEFAULT_CONTAINER_BIN = "~/bin/polka-dots"  # Where docker-compose.yml mounts the binary
DEFAULT_SUDO_PASSWORD = "hamu"  # Password of the container user
DOCKER_COMMAND = "docker"
CONFIG_DIR_NAME = ".polka-dots"
CONFIG_FILE_NAME = "config.json"

# === Run flow inputs ===
DEBCONF_SELECTION = "debconf debconf/frontend select Noninteractive"
BOOTSTRAP_COMMAND = ("./bin/yadm", "bootstrap")
BOOTSTRAP_AFFIRMATION = "y"
BOOTSTRAP_CONFIRMATION_COUNT = 4  # Prompts answered with the sudo password
