"""Application-level constants for dcr.

This module keeps only cross-cutting app/file/path constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "dcr"

# ============================================================================
# Environment variables
# ============================================================================

# Overrides the config directory holding project marker files
ENV_HOME = "DCR_HOME"

# Overrides the compose executable, e.g. "docker-compose" or "podman compose"
ENV_COMPOSE_COMMAND = "DCR_COMPOSE_COMMAND"

# Prints tracebacks for unexpected errors when set
ENV_DEBUG = "DCR_DEBUG"

# ============================================================================
# Default directories and file names
# ============================================================================

DEFAULT_CONFIG_DIR = f"~/.config/{APP_NAME}"

# Checked in this order in every directory while walking upwards
COMPOSE_FILE_NAMES = (
    "compose.yaml",
    "compose.yml",
    "docker-compose.yaml",
    "docker-compose.yml",
)
GROUP_FILE_NAME = ".dcrgroups"

OVERRIDE_INFIX = ".override"

# ============================================================================
# Project marker files (one set per remembered project)
# ============================================================================

PROJECT_PATH_SUFFIX = ".path"
PROJECT_GROUPS_SUFFIX = ".dcrgroups.path"
PROJECT_HISTORY_SUFFIX = ".history"

# ============================================================================
# Compose executables
# ============================================================================

DOCKER_BINARY = "docker"
COMPOSE_PLUGIN_COMMAND = ("docker", "compose")
COMPOSE_STANDALONE_COMMAND = ("docker-compose",)

# ============================================================================
# Completion tokens
# ============================================================================

FLAG_PREFIX = "-"
VALUE_SEPARATOR = "="
TOKEN_SEPARATOR = " "
