"""CLI argument parsing and application startup."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from . import dispatcher
from .completion import complete_words
from .discovery import find_compose_file, find_group_file, project_name_for
from .errors import ComposeCommandError, DcrError
from .logging_utils import log_event, setup_logging
from .projects import list_projects, load_project, remember_project, resolve_config_dir
from .repl import run_repl
from .session import Session

CURRENT_PROJECT = "."

FISH_COMPLETION_SCRIPT = "\n".join(
    (
        "# Put this in ~/.config/fish/completions or /usr/share/fish/vendor_completions.d",
        "function __fish_get_dcr_command",
        "  set cmd (commandline -opc)",
        "  eval $cmd --complete-next",
        "end",
        'complete -f -c dcr -a "(__fish_get_dcr_command)"',
    )
)

# Recognized before the project name only; later tokens belong to compose
_VALUE_OPTIONS = frozenset(("--file", "--env", "--log"))
# Recognized anywhere so shell completion can append it to any command line
_COMPLETE_OPTION = "--complete-next"


def split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate dcr's own arguments from the command forwarded to compose.

    The first token not starting with ``-`` is the project name; every token
    after it is forwarded verbatim, so compose flags such as ``-d`` never
    reach argparse.
    """
    own: list[str] = []
    forwarded: list[str] = []
    has_project = False
    expects_value = False

    for arg in argv:
        if expects_value:
            own.append(arg)
            expects_value = False
            continue

        option = arg.split("=", 1)[0]
        if option == _COMPLETE_OPTION:
            own.append(arg)
            continue

        if has_project:
            forwarded.append(arg)
            continue

        if option in _VALUE_OPTIONS:
            own.append(arg)
            expects_value = "=" not in arg
        elif arg.startswith("-"):
            own.append(arg)
        else:
            own.append(arg)
            has_project = True

    return own, forwarded


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dcr",
        description="dcr - A REPL for docker compose",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start a REPL for the compose file found above the current directory
  dcr

  # Re-enter a remembered project from anywhere
  dcr myproject

  # Run a single command, expanding groups from .dcrgroups
  dcr myproject restart backend
        """,
    )
    parser.add_argument(
        "--file",
        help="Path to docker compose file; if omitted, dcr walks upwards looking for one",
    )
    parser.add_argument(
        "--env",
        help="Environment file passed to docker compose as --env-file",
    )
    parser.add_argument("--log", help="Path to log file (optional)")
    parser.add_argument(
        "--list",
        action="store_true",
        help="List all remembered docker compose projects",
    )
    parser.add_argument(
        "--fish",
        action="store_true",
        help="Print the fish shell completion script",
    )
    parser.add_argument(
        _COMPLETE_OPTION,
        dest="complete_next",
        action="store_true",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "project",
        nargs="?",
        help="Name of a remembered project, or '.' for the current directory",
    )
    return parser


def resolve_project(
    project: str | None,
    file: str | None,
    config_dir: Path,
    cwd: Path,
) -> tuple[str, Path, Path | None]:
    """Return ``(name, compose_file, group_file)`` and remember new projects."""
    if project and project != CURRENT_PROJECT:
        compose_file, group_file = load_project(config_dir, project)
        return project, compose_file, group_file

    if file:
        compose_file = Path(file).expanduser().resolve()
        group_file = find_group_file(compose_file.parent)
    else:
        compose_file = find_compose_file(cwd)
        group_file = find_group_file(cwd)

    name = project_name_for(compose_file)
    remember_project(config_dir, name, compose_file, group_file)
    return name, compose_file, group_file


def print_projects(config_dir: Path, full: bool) -> None:
    projects = list_projects(config_dir)
    width = max((len(name) for name, _ in projects), default=0)
    for name, link in projects:
        if full:
            print(f"{name}{' ' * (width - len(name) + 4)}{link}")
        else:
            print(name)


def run_once(session: Session, tokens: list[str]) -> int:
    """Dispatch one command without entering the REPL; return the exit status."""
    try:
        dispatcher.execute_command(tokens, session)
    except ComposeCommandError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.returncode
    except DcrError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Application entry point."""
    raw = list(argv) if argv is not None else sys.argv[1:]
    own, forwarded = split_argv(raw)
    args = build_parser().parse_args(own)

    if args.fish:
        print(FISH_COMPLETION_SCRIPT)
        return

    try:
        config_dir = resolve_config_dir()
    except OSError as exc:
        _die(f"Could not create config directory: {exc}")

    if args.list:
        print_projects(config_dir, full=True)
        return

    if args.complete_next and args.project is None:
        print(CURRENT_PROJECT)
        print_projects(config_dir, full=False)
        return

    setup_logging(args.log)
    app_started = time.perf_counter()

    try:
        name, compose_file, group_file = resolve_project(
            args.project, args.file, config_dir, Path.cwd()
        )
        env_file = Path(args.env).expanduser().resolve() if args.env else None
        session = Session.open(name, config_dir, compose_file, group_file, env_file)
    except DcrError as exc:
        _die(str(exc))
    except OSError as exc:
        _die(f"Could not prepare project: {exc}")

    if args.complete_next:
        for suggestion in complete_words(forwarded, session.grammar):
            print(suggestion)
        return

    log_event(
        "app_start",
        level=logging.INFO,
        mode="once" if forwarded else "repl",
        project=session.name,
        compose_file=session.compose_file,
        group_file=session.group_file if session.group_support else None,
        config_dir=config_dir,
        log_file=args.log,
    )

    if forwarded:
        returncode = run_once(session, forwarded)
        _log_stop("once" if returncode == 0 else "command_failed", app_started)
        if returncode != 0:
            sys.exit(returncode)
        return

    try:
        run_repl(session)
    except KeyboardInterrupt:
        print()
        print("Interrupted.")
    except Exception as exc:
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="error",
            uptime_ms=_elapsed_ms(app_started),
            error_type=type(exc).__name__,
            error=str(exc),
        )
        print(f"ERROR: Unexpected: {exc}", file=sys.stderr)
        sys.exit(1)
    _log_stop("normal", app_started)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)


def _log_stop(reason: str, started: float) -> None:
    log_event("app_stop", level=logging.INFO, reason=reason, uptime_ms=_elapsed_ms(started))


def _die(message: str) -> NoReturn:
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(1)
