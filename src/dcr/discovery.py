"""Compose and group file discovery."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .constants import COMPOSE_FILE_NAMES, GROUP_FILE_NAME, OVERRIDE_INFIX
from .errors import FileLookupError


def find_upwards(start: Path, names: Sequence[str]) -> Path:
    """Return the first of ``names`` found in ``start`` or any parent directory.

    Within one directory, ``names`` are tried in order; the nearest directory
    wins over a better-ranked name further up.
    """
    current = start.resolve()
    while True:
        for name in names:
            candidate = current / name
            if candidate.is_file():
                return candidate
        if current.parent == current:
            raise FileLookupError(" or ".join(names), current)
        current = current.parent


def find_compose_file(start: Path) -> Path:
    return find_upwards(start, COMPOSE_FILE_NAMES)


def find_group_file(start: Path) -> Path | None:
    try:
        return find_upwards(start, (GROUP_FILE_NAME,))
    except FileLookupError:
        return None


def override_file_for(compose_file: Path) -> Path | None:
    """Return ``<stem>.override<suffix>`` beside the compose file if it exists."""
    if compose_file.suffix not in (".yml", ".yaml"):
        return None
    candidate = compose_file.with_name(
        f"{compose_file.stem}{OVERRIDE_INFIX}{compose_file.suffix}"
    )
    return candidate if candidate.is_file() else None


def project_name_for(compose_file: Path) -> str:
    """Projects are named after the directory holding their compose file."""
    return compose_file.parent.name
