"""Tests for signal absorption."""

import os
import signal

from dcr.signals import absorb_signals, absorbed_signals


def test_handlers_are_restored() -> None:
    before = {sig: signal.getsignal(sig) for sig in absorbed_signals()}

    with absorb_signals():
        for sig in absorbed_signals():
            assert signal.getsignal(sig) is not before[sig]

    for sig in absorbed_signals():
        assert signal.getsignal(sig) == before[sig]


def test_interrupt_does_not_raise_inside_block() -> None:
    with absorb_signals():
        os.kill(os.getpid(), signal.SIGINT)


def test_handlers_restored_after_exception() -> None:
    before = signal.getsignal(signal.SIGINT)

    try:
        with absorb_signals():
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert signal.getsignal(signal.SIGINT) is before
