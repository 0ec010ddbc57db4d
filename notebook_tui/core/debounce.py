"""Debounce with an explicit pending-timer slot.

A :class:`Debouncer` never owns an event loop.  It is handed a timer
factory at construction time, for example ``App.set_timer`` inside the
Textual app, :func:`threading_timer` for thread-per-timer use, or a manual
scheduler in tests.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Protocol, TypeVar

from ..log import logger

T = TypeVar("T")


class TimerHandle(Protocol):
    def stop(self) -> Any: ...


# ``(delay_seconds, callback) -> handle``; matches ``App.set_timer``.
TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class _ThreadTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self._timer = threading.Timer(delay, callback)
        self._timer.daemon = True
        self._timer.start()

    def stop(self) -> None:
        self._timer.cancel()


def threading_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Timer factory backed by :class:`threading.Timer`."""
    return _ThreadTimer(delay, callback)


class Debouncer(Generic[T]):
    """Commit only the latest value once input has been quiet for *delay_ms*.

    Each ``trigger`` cancels the pending timer (if any) and starts a new
    one; the value is replaced, not merged.  ``flush`` commits a pending
    value immediately and ``cancel`` drops it.

    The slot and the commit run under one re-entrant lock, so timers that
    fire on another thread (:func:`threading_timer`) never commit twice or
    concurrently with ``trigger`` / ``flush``.
    """

    def __init__(
        self,
        delay_ms: int,
        commit: Callable[[T], object],
        set_timer: TimerFactory,
        *,
        name: str = "debounce",
    ) -> None:
        self.delay_ms = delay_ms
        self.name = name
        self._commit = commit
        self._set_timer = set_timer
        self._timer: TimerHandle | None = None
        self._value: T | None = None
        self._has_value = False
        self._lock = threading.RLock()
        # Bumped whenever the slot changes; a late timer from an older
        # generation fires into nothing.
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._has_value

    def trigger(self, value: T) -> None:
        with self._lock:
            self._stop_timer()
            self._value = value
            self._has_value = True
            self._generation += 1
            generation = self._generation
            self._timer = self._set_timer(
                self.delay_ms / 1000, lambda: self._on_timer(generation)
            )

    def flush(self) -> None:
        """Commit the pending value now, if there is one."""
        with self._lock:
            self._stop_timer()
            self._fire()

    def cancel(self) -> None:
        with self._lock:
            self._stop_timer()
            self._generation += 1
            self._value = None
            self._has_value = False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._fire()

    def _fire(self) -> None:
        with self._lock:
            self._generation += 1
            self._timer = None
            if not self._has_value:
                return
            value = self._value
            self._value = None
            self._has_value = False
            logger.debug("%s: committing after %d ms quiet", self.name, self.delay_ms)
            self._commit(value)  # type: ignore[arg-type]

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
