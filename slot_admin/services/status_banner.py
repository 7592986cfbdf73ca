from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

ERROR = "error"
SUCCESS = "success"


class CancellableTimer(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], CancellableTimer]


def start_daemon_timer(delay_seconds: float, callback: Callable[[], None]) -> CancellableTimer:
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    timer.start()
    return timer


class StatusBanner:
    """
    Transient error and success messages.

    Each kind holds one message. Showing a message cancels the pending
    auto-clear of the same kind and schedules a fresh one, so a newer message
    always stays up for its full delay.
    """

    def __init__(
        self,
        *,
        success_seconds: float = 3.0,
        error_seconds: float = 5.0,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self._delays = {SUCCESS: success_seconds, ERROR: error_seconds}
        self._timer_factory = timer_factory or start_daemon_timer
        self._messages = {SUCCESS: "", ERROR: ""}
        self._timers: dict[str, CancellableTimer] = {}
        self._generations = {SUCCESS: 0, ERROR: 0}
        self._closed = False
        self._lock = threading.Lock()

    @property
    def success(self) -> str:
        return self._messages[SUCCESS]

    @property
    def error(self) -> str:
        return self._messages[ERROR]

    def show_success(self, message: str) -> None:
        self._show(SUCCESS, message)

    def show_error(self, message: str) -> None:
        self._show(ERROR, message)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()

    def _show(self, kind: str, message: str) -> None:
        with self._lock:
            pending_timer = self._timers.pop(kind, None)
            if pending_timer is not None:
                pending_timer.cancel()
            self._generations[kind] += 1
            self._messages[kind] = message
            if self._closed:
                return
            generation = self._generations[kind]
            self._timers[kind] = self._timer_factory(
                self._delays[kind],
                lambda: self._expire(kind, generation),
            )

    def _expire(self, kind: str, generation: int) -> None:
        with self._lock:
            # A cancelled timer can still fire if it was already running.
            if self._generations[kind] != generation:
                return
            self._messages[kind] = ""
            self._timers.pop(kind, None)
        logger.debug("Cleared %s message", kind)
