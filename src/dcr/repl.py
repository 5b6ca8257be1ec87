"""REPL parsing and loop orchestration for dcr."""

from __future__ import annotations

import logging
import os
import shlex
import traceback
from collections.abc import Callable
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory

from . import dispatcher
from .completion import ComposeCompleter
from .constants import ENV_DEBUG
from .dispatcher import DispatchOutcome
from .errors import DcrError, UsageError
from .logging_utils import log_event, summarize_args
from .session import Session

PromptFactory = Callable[[Session], Any]


def _report_unexpected_error(error: Exception) -> None:
    """Print an unexpected exception with optional debug traceback."""
    print(f"ERROR: {error}")
    if os.getenv(ENV_DEBUG):
        print("Debug traceback:")
        traceback.print_exc()


def parse_line(line: str) -> list[str]:
    """Split a submitted line into tokens, honoring shell-style quotes."""
    try:
        return shlex.split(line)
    except ValueError as e:
        raise UsageError(f"Invalid command syntax: {e}") from e


def build_prompt(name: str) -> FormattedText:
    return FormattedText([("ansigreen", f"[{name}]>"), ("", " ")])


def create_prompt_session(session: Session) -> PromptSession:
    """Create a prompt-toolkit session bound to the project's history file."""
    history_path = session.history_path
    history_path.parent.mkdir(parents=True, exist_ok=True)
    return PromptSession(
        message=build_prompt(session.name),
        history=FileHistory(str(history_path)),
        completer=ComposeCompleter(lambda: session.grammar),
        complete_while_typing=False,
    )


def _has_pending_text(prompt_session: Any) -> bool:
    buffer = getattr(prompt_session, "default_buffer", None)
    return bool(buffer is not None and buffer.text.strip())


def run_repl(
    session: Session,
    prompt_factory: PromptFactory = create_prompt_session,
) -> None:
    """Run the REPL loop until exit, Ctrl-D, or Ctrl-C on an empty line."""
    prompt_session = prompt_factory(session)

    while True:
        try:
            line = prompt_session.prompt()
        except KeyboardInterrupt:
            # Ctrl-C discards a typed line; on an empty line it leaves
            if _has_pending_text(prompt_session):
                continue
            break
        except EOFError:
            break

        tokens: list[str] = []
        try:
            tokens = parse_line(line.strip())
            outcome = dispatcher.execute_command(tokens, session)
        except DcrError as e:
            log_event(
                "command_error",
                level=logging.WARNING,
                command=tokens[0] if tokens else None,
                args_summary=summarize_args(tokens[1:]),
                error_type=type(e).__name__,
                error=str(e),
            )
            print(f"ERROR: {e}")
            continue
        except Exception as e:
            log_event(
                "command_error",
                level=logging.ERROR,
                command=tokens[0] if tokens else None,
                args_summary=summarize_args(tokens[1:]),
                error_type=type(e).__name__,
                error=str(e),
            )
            _report_unexpected_error(e)
            continue

        if outcome is DispatchOutcome.EXIT:
            break
        if outcome is DispatchOutcome.RELOAD:
            prompt_session = prompt_factory(session)
