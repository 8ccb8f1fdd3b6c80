# src/eddy/engine/shutdown.py
"""Signal-driven cancellation for long-running operator commands."""

from __future__ import annotations

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


@contextmanager
def shutdown_handler_context() -> Iterator[threading.Event]:
    """Install SIGINT/SIGTERM handlers that set a cancellation event.

    On first signal: sets the event, restores default SIGINT handler
    (so a second Ctrl-C force-kills via KeyboardInterrupt).

    When called from a non-main thread, signal registration is skipped
    (Python raises ValueError if signal.signal() is called outside the main
    thread). The returned Event still works; it just won't be triggered by
    OS signals.

    Yields the Event for the polling loop to check and sleep on.
    Restores original handlers in finally block (main thread only).
    """
    shutdown_event = threading.Event()

    if threading.current_thread() is not threading.main_thread():
        yield shutdown_event
        return

    original_sigint = signal.getsignal(signal.SIGINT)
    original_sigterm = signal.getsignal(signal.SIGTERM)

    def _handler(signum: int, frame: Any) -> None:
        shutdown_event.set()
        signal.signal(signal.SIGINT, signal.default_int_handler)

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)
    try:
        yield shutdown_event
    finally:
        signal.signal(signal.SIGINT, original_sigint)
        signal.signal(signal.SIGTERM, original_sigterm)
