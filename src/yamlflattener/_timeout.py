"""Bounded-time execution on a daemon worker thread."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


class WorkerTimeout(Exception):
    """*fn* did not finish within the allowed time."""


def run_with_timeout(fn: Callable[[], T], timeout: float) -> T:
    """Run *fn* on a worker thread and wait at most *timeout* seconds.

    Returns the worker's result or re-raises its exception.  On timeout
    raises :class:`WorkerTimeout`; the worker is abandoned rather than
    cancelled and only ever writes to its own private holder, so nothing it
    does later is observed by the caller.
    """
    result: list[T] = []
    error: list[BaseException] = []

    def _target() -> None:
        try:
            result.append(fn())
        except BaseException as exc:  # noqa: BLE001 -- re-raised by caller
            error.append(exc)

    thread = threading.Thread(target=_target, daemon=True)
    thread.start()
    thread.join(timeout=timeout)

    if thread.is_alive():
        raise WorkerTimeout(f"operation did not finish within {timeout}s")
    if error:
        raise error[0]
    return result[0]
