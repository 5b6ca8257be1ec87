"""Session state container for dcr runtime."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .documents import load_compose_document, load_group_document
from .errors import GroupFileError
from .grammar import GrammarTable, build_grammar
from .logging_utils import log_event
from .projects import history_file


@dataclass
class Session:
    """In-memory runtime state for one compose project."""

    name: str
    config_dir: Path
    compose_file: Path
    group_file: Path | None = None
    env_file: Path | None = None
    services: tuple[str, ...] = ()
    # None when the project has no usable group file
    groups: dict[str, list[str]] | None = None
    grammar: GrammarTable = field(default_factory=lambda: build_grammar(()))

    @classmethod
    def open(
        cls,
        name: str,
        config_dir: Path,
        compose_file: Path,
        group_file: Path | None = None,
        env_file: Path | None = None,
    ) -> Session:
        """Create a session and load its documents; compose errors propagate."""
        session = cls(
            name=name,
            config_dir=config_dir,
            compose_file=compose_file,
            group_file=group_file,
            env_file=env_file,
        )
        session.reload(trigger="startup")
        return session

    @property
    def group_support(self) -> bool:
        return self.groups is not None

    @property
    def history_path(self) -> Path:
        return history_file(self.config_dir, self.name)

    def completion_names(self) -> list[str]:
        """Services and group names offered as command children, sorted."""
        names = set(self.services)
        if self.groups is not None:
            names.update(self.groups)
        return sorted(names)

    def reload(self, trigger: str = "reload") -> None:
        """Re-read the compose and group files and rebuild the grammar table.

        A broken compose file raises ComposeFileError and leaves the current
        state untouched.
        """
        services = load_compose_document(self.compose_file)
        groups = self._load_groups()

        self.services = services
        self.groups = groups
        self.grammar = build_grammar(self.completion_names(), self.services)

        log_event(
            "session_load",
            level=logging.INFO,
            project=self.name,
            compose_file=self.compose_file,
            group_file=self.group_file,
            service_count=len(self.services),
            group_count=len(self.groups) if self.groups is not None else None,
            trigger=trigger,
        )

    def rename(self, name: str) -> None:
        self.name = name

    def _load_groups(self) -> dict[str, list[str]] | None:
        if self.group_file is None:
            return None
        try:
            return load_group_document(self.group_file)
        except GroupFileError as exc:
            log_event(
                "group_support_disabled",
                level=logging.WARNING,
                project=self.name,
                group_file=self.group_file,
                error=str(exc),
            )
            return None
