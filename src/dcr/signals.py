"""Keep dcr alive while a compose command owns the terminal."""

from __future__ import annotations

import signal
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

ABSORBED_SIGNAL_NAMES = ("SIGHUP", "SIGINT", "SIGTERM", "SIGQUIT")


def _absorb(signum: int, frame: FrameType | None) -> None:
    return None


def absorbed_signals() -> list[signal.Signals]:
    """Return the absorbed signals that exist on this platform."""
    found = []
    for name in ABSORBED_SIGNAL_NAMES:
        sig = getattr(signal, name, None)
        if sig is not None:
            found.append(sig)
    return found


@contextmanager
def absorb_signals() -> Iterator[None]:
    """Swallow interrupt/termination signals for the duration of the block.

    A Python-level handler is installed rather than SIG_IGN: caught signals
    are reset to their default on exec, so the child still reacts to Ctrl-C
    while dcr itself keeps running.
    """
    previous = {}
    for sig in absorbed_signals():
        previous[sig] = signal.signal(sig, _absorb)
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
