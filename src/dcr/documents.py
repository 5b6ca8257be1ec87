"""YAML loading and typed decoding of compose and group documents."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import ComposeFileError, GroupFileError
from .models import ComposeDocument, GroupDocument


def _read_yaml(path: Path) -> object:
    text = path.read_text(encoding="utf-8")
    return yaml.safe_load(text)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def load_compose_document(path: Path) -> tuple[str, ...]:
    """Load a compose file and return its service names, sorted.

    Raises ComposeFileError when the file is missing, unreadable, not valid
    YAML, or has no ``services`` mapping.
    """
    try:
        raw = _read_yaml(path)
    except OSError as exc:
        raise ComposeFileError(path, exc.strerror or str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ComposeFileError(path, f"YAML error: {exc}") from exc

    if not isinstance(raw, dict):
        raise ComposeFileError(path, "expected a mapping at the top level")

    try:
        document = ComposeDocument.model_validate(raw)
    except ValidationError as exc:
        raise ComposeFileError(path, _first_error(exc)) from exc

    return document.service_names()


def load_group_document(path: Path) -> dict[str, list[str]]:
    """Load a ``.dcrgroups`` file and return its group -> members mapping.

    Raises GroupFileError on any problem; callers treat that as "no group
    support" rather than a fatal error.
    """
    try:
        raw = _read_yaml(path)
    except OSError as exc:
        raise GroupFileError(path, exc.strerror or str(exc)) from exc
    except yaml.YAMLError as exc:
        raise GroupFileError(path, f"YAML error: {exc}") from exc

    if not isinstance(raw, dict):
        raise GroupFileError(path, "expected a mapping at the top level")

    try:
        document = GroupDocument.model_validate(raw)
    except ValidationError as exc:
        raise GroupFileError(path, _first_error(exc)) from exc

    return {name: list(members) for name, members in document.groups.items()}
