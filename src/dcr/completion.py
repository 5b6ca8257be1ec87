"""Completion engine for partial compose command lines.

``complete`` is a pure function of the input and a grammar table: it returns
the suffixes that would finish the token under the cursor, each carrying its
own trailing separator (a space, or nothing after a ``key=`` style value).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from .constants import FLAG_PREFIX, TOKEN_SEPARATOR, VALUE_SEPARATOR
from .grammar import CommandSpec, GrammarTable

_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str) -> list[str]:
    """Split on whitespace, keeping an empty last token after trailing space."""
    return _WHITESPACE.split(text.lstrip())


def _suffix(candidate: str, token: str) -> str:
    rest = candidate[len(token):]
    if candidate.endswith(VALUE_SEPARATOR):
        return rest
    return rest + TOKEN_SEPARATOR


def _offers_flags(tokens: Sequence[str]) -> bool:
    current = tokens[-1]
    if not current.startswith(FLAG_PREFIX):
        return False
    return len(tokens) == 2 or tokens[-2].startswith(FLAG_PREFIX)


def _offers_children(spec: CommandSpec, tokens: Sequence[str]) -> bool:
    if spec.recurses_into_children:
        return True
    # Single-child commands: stop once a child has been given
    return not any(token in spec.children for token in tokens[1:-1])


def complete(line: str, cursor: int, table: GrammarTable) -> list[str]:
    """Return completion suffixes for ``line`` with the cursor at ``cursor``."""
    cursor = max(0, min(cursor, len(line)))
    tokens = tokenize(line[:cursor])

    if len(tokens) == 1:
        token = tokens[0]
        return [_suffix(name, token) for name in sorted(table) if name.startswith(token)]

    spec = table.get(tokens[0])
    if spec is None or not spec.accepts_children:
        return []

    current = tokens[-1]
    suggestions: list[str] = []
    if _offers_flags(tokens):
        suggestions.extend(
            _suffix(flag, current) for flag in spec.flags if flag.startswith(current)
        )
    if _offers_children(spec, tokens):
        suggestions.extend(
            _suffix(child, current) for child in spec.children if child.startswith(current)
        )
    return suggestions


def complete_words(words: Sequence[str], table: GrammarTable) -> list[str]:
    """Complete the word following ``words``, as asked by a shell completion script."""
    so_far = TOKEN_SEPARATOR.join(words)
    if so_far:
        so_far += TOKEN_SEPARATOR
    return [suggestion.strip() for suggestion in complete(so_far, len(so_far), table)]


class ComposeCompleter(Completer):
    """prompt_toolkit adapter over ``complete``.

    The table is fetched on every request so a ``reload`` is picked up
    without rebuilding the prompt.
    """

    def __init__(self, table_source: Callable[[], GrammarTable]) -> None:
        self._table_source = table_source

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        word = tokenize(text)[-1]
        for suffix in complete(text, len(text), self._table_source()):
            yield Completion(
                suffix,
                start_position=0,
                display=(word + suffix).rstrip(),
            )
