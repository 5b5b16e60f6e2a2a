"""Run a blocking call on a worker thread while animating a status line.

The calling thread only draws; the worker only runs the operation. They share
a single TaskOutcome slot that the worker fills before setting a
threading.Event, so the caller never reads a half-written result.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, TypeVar

from rich.cells import cell_len
from rich.console import Console

from ghai_core.errors import TaskTimeoutError
from ghai_core.models import TaskOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
FRAME_INTERVAL = 0.08

# Progress goes to stderr so stdout stays clean for piped output.
_stderr_console = Console(stderr=True)


def _write(console: Console, text: str) -> None:
    # Raw write: rich markup and line wrapping would break the \r redraw.
    console.file.write(text)
    console.file.flush()


def _erase(console: Console, label: str) -> None:
    # Pad by terminal cells, not characters: CJK labels are two cells wide.
    _write(console, "\r" + " " * (cell_len(label) + 3) + "\r")


def _join(worker: threading.Thread, label: str) -> None:
    while worker.is_alive():
        try:
            worker.join()
        except KeyboardInterrupt:
            logger.debug("Interrupted while waiting for %r; still waiting", label)


def run_with_progress(
    label: str,
    operation: Callable[[], T],
    console: Optional[Console] = None,
    interval: float = FRAME_INTERVAL,
    timeout: Optional[float] = None,
) -> T:
    """Run ``operation`` in the background and return its result.

    While it runs, ``label`` is shown next to a spinner frame that is redrawn
    every ``interval`` seconds. The line is erased before this function
    returns or raises. Exceptions from ``operation`` are re-raised unchanged.

    With no ``timeout`` (the default) the worker is always joined before
    returning or raising. When ``timeout`` seconds of wall-clock time pass
    first, TaskTimeoutError is raised and the worker keeps running in the
    background as a daemon thread; it cannot be stopped and may still produce
    side effects.

    Ctrl-C during the animation is absorbed: drawing stops, the call still
    waits for the operation and returns (or raises) its outcome.
    """
    console = console or _stderr_console
    outcome: TaskOutcome[T] = TaskOutcome()
    done = threading.Event()

    def _work() -> None:
        try:
            outcome.value = operation()
        except BaseException as e:  # handed back to the caller via unwrap()
            outcome.error = e
        finally:
            done.set()

    worker = threading.Thread(target=_work, name=f"ghai-task:{label}", daemon=True)
    worker.start()

    deadline = None if timeout is None else time.monotonic() + timeout
    frame = 0
    animating = True
    try:
        while not done.is_set():
            try:
                if deadline is not None and time.monotonic() >= deadline:
                    break
                if animating:
                    _write(console, f"\r{FRAMES[frame % len(FRAMES)]} {label}")
                    frame += 1
                wait = interval if deadline is None else max(0.0, min(interval, deadline - time.monotonic()))
                done.wait(wait)
            except KeyboardInterrupt:
                logger.debug("Progress animation for %r interrupted; waiting for the task", label)
                animating = False
    finally:
        if deadline is None or done.is_set():
            _join(worker, label)
        _erase(console, label)

    if not done.is_set():
        raise TaskTimeoutError(label, timeout)  # type: ignore[arg-type]
    return outcome.unwrap()
