"""Remembered projects stored as flat marker files in the config directory.

Each project ``<name>`` owns up to three files:

- ``<name>.path``: absolute path of the compose file
- ``<name>.dcrgroups.path``: absolute path of the group file (optional)
- ``<name>.history``: REPL input history

Aliases are symlinks to another project's files, so history and paths stay
shared between the names.
"""

from __future__ import annotations

import os
from pathlib import Path

from .constants import (
    DEFAULT_CONFIG_DIR,
    ENV_HOME,
    PROJECT_GROUPS_SUFFIX,
    PROJECT_HISTORY_SUFFIX,
    PROJECT_PATH_SUFFIX,
)
from .errors import ProjectNotFoundError, UsageError


def resolve_config_dir() -> Path:
    """Return the config directory, honoring ``DCR_HOME``, and create it."""
    raw = os.environ.get(ENV_HOME) or DEFAULT_CONFIG_DIR
    config_dir = Path(raw).expanduser()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def _path_marker(config_dir: Path, name: str) -> Path:
    return config_dir / f"{name}{PROJECT_PATH_SUFFIX}"


def _groups_marker(config_dir: Path, name: str) -> Path:
    return config_dir / f"{name}{PROJECT_GROUPS_SUFFIX}"


def history_file(config_dir: Path, name: str) -> Path:
    return config_dir / f"{name}{PROJECT_HISTORY_SUFFIX}"


def remember_project(
    config_dir: Path,
    name: str,
    compose_file: Path,
    group_file: Path | None,
) -> None:
    """Write the marker files for a project found on disk."""
    _path_marker(config_dir, name).write_text(f"{compose_file}\n", encoding="utf-8")
    groups_marker = _groups_marker(config_dir, name)
    if group_file is not None:
        groups_marker.write_text(f"{group_file}\n", encoding="utf-8")
    else:
        groups_marker.unlink(missing_ok=True)


def load_project(config_dir: Path, name: str) -> tuple[Path, Path | None]:
    """Return ``(compose_file, group_file)`` for a remembered project."""
    marker = _path_marker(config_dir, name)
    try:
        compose_raw = marker.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ProjectNotFoundError(name) from exc
    if not compose_raw:
        raise ProjectNotFoundError(name)

    group_file: Path | None = None
    groups_marker = _groups_marker(config_dir, name)
    try:
        group_raw = groups_marker.read_text(encoding="utf-8").strip()
    except OSError:
        group_raw = ""
    if group_raw:
        group_file = Path(group_raw)

    return Path(compose_raw), group_file


def alias_project(config_dir: Path, name: str, alias: str) -> None:
    """Make ``alias`` another name for project ``name``."""
    if not alias or "/" in alias or alias in (".", ".."):
        raise UsageError(f"Invalid alias '{alias}'.")
    if alias == name:
        return

    target_path = _path_marker(config_dir, alias)
    if target_path.exists() or target_path.is_symlink():
        raise UsageError(f"Alias '{alias}' already exists.")

    pairs = (
        (_path_marker(config_dir, name), target_path),
        (_groups_marker(config_dir, name), _groups_marker(config_dir, alias)),
        (history_file(config_dir, name), history_file(config_dir, alias)),
    )
    for source, link in pairs:
        if link.exists() or link.is_symlink():
            continue
        # History may not exist yet; a dangling link is filled on first write.
        if source.suffix != PROJECT_HISTORY_SUFFIX and not source.exists():
            continue
        link.symlink_to(source)


def list_projects(config_dir: Path) -> list[tuple[str, str]]:
    """Return ``(name, compose_path)`` for every remembered project, sorted."""
    projects: list[tuple[str, str]] = []
    for entry in sorted(config_dir.iterdir(), key=lambda p: p.name):
        file_name = entry.name
        if not file_name.endswith(PROJECT_PATH_SUFFIX):
            continue
        if file_name.endswith(PROJECT_GROUPS_SUFFIX):
            continue
        name = file_name[: -len(PROJECT_PATH_SUFFIX)]
        try:
            link = entry.read_text(encoding="utf-8").strip()
        except OSError:
            link = ""
        projects.append((name, link))
    return projects
