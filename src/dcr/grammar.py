"""Command grammar table driving completion.

The static part (command names, flags, whether children are accepted) lives
in ``COMMAND_SYNTAX``; only the child list depends on the loaded project, so
``build_grammar`` is re-run whenever the compose or group file is reloaded.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from .constants import VALUE_SEPARATOR


class ChildKind(StrEnum):
    NONE = "none"
    NAMES = "names"
    # service=count, as taken by ``scale``
    ASSIGNMENTS = "assignments"


@dataclass(frozen=True, slots=True)
class CommandSyntax:
    """Static syntax of one subcommand."""

    name: str
    flags: tuple[str, ...] = ()
    children: ChildKind = ChildKind.NONE
    single_child: bool = False


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """One grammar table entry."""

    name: str
    accepts_children: bool = False
    children: tuple[str, ...] = ()
    flags: tuple[str, ...] = ()
    recurses_into_children: bool = True


GrammarTable = Mapping[str, CommandSpec]


BUILTIN_COMMANDS = ("alias", "exit", "help", "quit", "reload", "services")

COMMAND_SYNTAX: tuple[CommandSyntax, ...] = (
    # REPL built-ins
    *(CommandSyntax(name) for name in BUILTIN_COMMANDS),
    # docker compose subcommands
    CommandSyntax(
        "attach",
        ("--detach-keys=", "--index=", "--no-stdin", "--sig-proxy="),
        ChildKind.NAMES,
        single_child=True,
    ),
    CommandSyntax(
        "build",
        ("--build-arg=", "--no-cache", "--progress=", "--pull", "--push", "--quiet"),
        ChildKind.NAMES,
    ),
    CommandSyntax(
        "config",
        ("--format=", "--images", "--output=", "--profiles", "--quiet", "--services", "--volumes"),
        ChildKind.NAMES,
    ),
    CommandSyntax(
        "cp",
        ("--archive", "--follow-link", "--index="),
        ChildKind.NAMES,
        single_child=True,
    ),
    CommandSyntax(
        "create",
        ("--build", "--force-recreate", "--no-build", "--no-recreate", "--pull=", "--scale="),
        ChildKind.NAMES,
    ),
    CommandSyntax(
        "down",
        ("--remove-orphans", "--rmi=", "--timeout=", "--volumes"),
        ChildKind.NAMES,
    ),
    CommandSyntax("events", ("--json",), ChildKind.NAMES),
    CommandSyntax(
        "exec",
        ("--detach", "--env=", "--index=", "--no-TTY", "--privileged", "--user=", "--workdir="),
        ChildKind.NAMES,
        single_child=True,
    ),
    CommandSyntax("images", ("--format=", "--quiet"), ChildKind.NAMES),
    CommandSyntax("kill", ("--remove-orphans", "--signal="), ChildKind.NAMES),
    CommandSyntax(
        "logs",
        (
            "--follow",
            "--index=",
            "--no-color",
            "--no-log-prefix",
            "--since=",
            "--tail=",
            "--timestamps",
            "--until=",
        ),
        ChildKind.NAMES,
    ),
    CommandSyntax("ls"),
    CommandSyntax("pause", (), ChildKind.NAMES),
    CommandSyntax("port", ("--index=", "--protocol="), ChildKind.NAMES, single_child=True),
    CommandSyntax(
        "ps",
        ("--all", "--filter=", "--format=", "--quiet", "--services", "--status="),
        ChildKind.NAMES,
    ),
    CommandSyntax(
        "pull",
        ("--ignore-pull-failures", "--include-deps", "--policy=", "--quiet"),
        ChildKind.NAMES,
    ),
    CommandSyntax(
        "push",
        ("--ignore-push-failures", "--include-deps", "--quiet"),
        ChildKind.NAMES,
    ),
    CommandSyntax("restart", ("--no-deps", "--timeout="), ChildKind.NAMES),
    CommandSyntax("rm", ("--force", "--stop", "--volumes"), ChildKind.NAMES),
    CommandSyntax(
        "run",
        (
            "--build",
            "--detach",
            "--entrypoint=",
            "--env=",
            "--name=",
            "--no-deps",
            "--publish=",
            "--rm",
            "--service-ports",
            "--user=",
            "--volume=",
            "--workdir=",
        ),
        ChildKind.NAMES,
        single_child=True,
    ),
    CommandSyntax("scale", ("--no-deps",), ChildKind.ASSIGNMENTS),
    CommandSyntax("start", (), ChildKind.NAMES),
    CommandSyntax("stop", ("--timeout=",), ChildKind.NAMES),
    CommandSyntax("top", (), ChildKind.NAMES),
    CommandSyntax("unpause", (), ChildKind.NAMES),
    CommandSyntax(
        "up",
        (
            "--abort-on-container-exit",
            "--build",
            "--detach",
            "--force-recreate",
            "--no-build",
            "--no-deps",
            "--no-recreate",
            "--remove-orphans",
            "--scale=",
            "--timeout=",
            "--wait",
        ),
        ChildKind.NAMES,
    ),
    CommandSyntax("version"),
    CommandSyntax("wait", ("--down-project",), ChildKind.NAMES),
    CommandSyntax("watch", ("--no-up", "--prune", "--quiet"), ChildKind.NAMES),
)


def _children_for(
    kind: ChildKind, names: Sequence[str], services: Sequence[str]
) -> tuple[str, ...]:
    if kind is ChildKind.NAMES:
        return tuple(names)
    if kind is ChildKind.ASSIGNMENTS:
        # Services only: group names are not expanded inside "name=value"
        return tuple(f"{service}{VALUE_SEPARATOR}" for service in services)
    return ()


def build_grammar(
    names: Sequence[str], services: Sequence[str] | None = None
) -> GrammarTable:
    """Build the grammar table for one project.

    ``names`` are the completion names offered as children: the project's
    services plus its group names, in the order completion should list them.
    ``services`` restricts assignment children (``scale``) to real services;
    when omitted, ``names`` is used.
    """
    if services is None:
        services = names
    table: dict[str, CommandSpec] = {}
    for syntax in COMMAND_SYNTAX:
        accepts_children = syntax.children is not ChildKind.NONE
        table[syntax.name] = CommandSpec(
            name=syntax.name,
            accepts_children=accepts_children,
            children=_children_for(syntax.children, names, services),
            flags=syntax.flags,
            recurses_into_children=not syntax.single_child,
        )
    return MappingProxyType(table)
