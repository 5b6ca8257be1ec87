"""Command dispatching for the dcr REPL and one-shot mode."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from . import compose_runner
from .errors import ComposeCommandError
from .logging_utils import log_event, summarize_args
from .projects import alias_project
from .rewriter import expand_groups
from .session import Session


class DispatchOutcome(StrEnum):
    CONTINUE = "continue"
    # The prompt must be rebuilt: project name, history or completions changed
    RELOAD = "reload"
    EXIT = "exit"


@dataclass
class CommandHandler:
    """Defines how to execute a REPL built-in."""

    executor: Callable[[list[str], Session], DispatchOutcome]
    usage: str = ""
    summary: str = ""


_HELP_HEADER = """\
REPL:
Wraps docker compose and has a few extra commands

Commands:"""
_HELP_FOOTER = """
Group names from .dcrgroups are replaced by their services.

Docker Compose:"""


def forward(command: str, args: list[str], session: Session) -> None:
    """Expand groups and run ``command`` through the compose tool.

    Only ``args`` are expanded. ``command`` is passed through as typed, even
    when it matches a group name, so a group can never replace the compose
    subcommand.

    Raises ComposeCommandError when the tool exits with a non-zero status.
    """
    expanded = [command, *expand_groups(args, session.groups)]
    tool = compose_runner.resolve_compose_command()
    argv = compose_runner.build_argv(tool, session.compose_file, expanded, session.env_file)

    started = time.perf_counter()
    returncode = compose_runner.run_compose(argv)
    log_event(
        "command_exec",
        level=logging.INFO,
        command=command,
        args_summary=summarize_args(args),
        argv=argv,
        returncode=returncode,
        elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    if returncode != 0:
        raise ComposeCommandError(returncode)


def _exec_alias(args: list[str], session: Session) -> DispatchOutcome:
    if len(args) != 1:
        print(
            "WARNING: alias needs exactly one parameter to be used as the alias "
            "for the compose file."
        )
        return DispatchOutcome.CONTINUE

    alias = args[0]
    alias_project(session.config_dir, session.name, alias)
    log_event("project_alias", level=logging.INFO, project=session.name, alias=alias)
    session.rename(alias)
    session.reload()
    return DispatchOutcome.RELOAD


def _exec_reload(args: list[str], session: Session) -> DispatchOutcome:
    session.reload()
    return DispatchOutcome.RELOAD


def _exec_exit(args: list[str], session: Session) -> DispatchOutcome:
    return DispatchOutcome.EXIT


def _exec_services(args: list[str], session: Session) -> DispatchOutcome:
    for service in session.services:
        print(service)
    return DispatchOutcome.CONTINUE


def _exec_help(args: list[str], session: Session) -> DispatchOutcome:
    print(format_help())
    forward("--help", [], session)
    return DispatchOutcome.CONTINUE


COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "alias": CommandHandler(
        _exec_alias,
        usage="alias <name>",
        summary="Set alias for current docker compose file",
    ),
    "reload": CommandHandler(
        _exec_reload,
        usage="reload",
        summary="Reload the compose and group files",
    ),
    "services": CommandHandler(
        _exec_services,
        usage="services",
        summary="List the services of the compose file",
    ),
    "help": CommandHandler(_exec_help, usage="help", summary="Show this help"),
    "exit": CommandHandler(_exec_exit, usage="exit | quit", summary="Leave the REPL"),
    "quit": CommandHandler(_exec_exit),
}


def format_help() -> str:
    lines = [_HELP_HEADER]
    for handler in COMMAND_HANDLERS.values():
        if not handler.usage:
            continue
        lines.append(f"  {handler.usage:<18} {handler.summary}")
    lines.append(_HELP_FOOTER)
    return "\n".join(lines)


def execute_command(tokens: list[str], session: Session) -> DispatchOutcome:
    """Run one tokenized command line against the session."""
    if not tokens:
        return DispatchOutcome.CONTINUE

    command, args = tokens[0], tokens[1:]
    handler = COMMAND_HANDLERS.get(command)
    if handler is not None:
        return handler.executor(args, session)

    forward(command, args, session)
    return DispatchOutcome.CONTINUE
