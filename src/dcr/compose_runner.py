"""Invocation of the external compose tool."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .constants import (
    COMPOSE_PLUGIN_COMMAND,
    COMPOSE_STANDALONE_COMMAND,
    DOCKER_BINARY,
    ENV_COMPOSE_COMMAND,
)
from .discovery import override_file_for
from .errors import ComposeToolNotFoundError
from .signals import absorb_signals


def resolve_compose_command() -> list[str]:
    """Return the compose executable as argv prefix.

    ``DCR_COMPOSE_COMMAND`` wins; otherwise ``docker compose`` when docker is
    installed, then the standalone ``docker-compose``.
    """
    configured = os.environ.get(ENV_COMPOSE_COMMAND, "").strip()
    if configured:
        return shlex.split(configured)
    if shutil.which(DOCKER_BINARY):
        return list(COMPOSE_PLUGIN_COMMAND)
    if shutil.which(COMPOSE_STANDALONE_COMMAND[0]):
        return list(COMPOSE_STANDALONE_COMMAND)
    raise ComposeToolNotFoundError()


def build_argv(
    tool: Sequence[str],
    compose_file: Path,
    args: Sequence[str],
    env_file: Path | None = None,
) -> list[str]:
    """Assemble ``<tool> -f <file> [-f <override>] [--env-file <env>] <args>``."""
    argv = [*tool, "-f", str(compose_file)]
    override = override_file_for(compose_file)
    if override is not None:
        argv.extend(["-f", str(override)])
    if env_file is not None:
        argv.extend(["--env-file", str(env_file)])
    argv.extend(args)
    return argv


def run_compose(argv: Sequence[str]) -> int:
    """Run the compose tool on the inherited terminal and return its exit status."""
    try:
        with absorb_signals():
            completed = subprocess.run(list(argv), check=False)
    except FileNotFoundError as exc:
        raise ComposeToolNotFoundError() from exc
    return completed.returncode
