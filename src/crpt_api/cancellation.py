"""Cooperative cancellation for callers blocked on the rate limiter."""

from __future__ import annotations

import threading
from collections.abc import Callable


class CancellationToken:
    """Thread-safe flag that releases callers waiting on a slot.

    Listeners registered with :meth:`add_listener` are invoked once when the
    token is cancelled, so blocked waiters can wake up immediately instead of
    sleeping until their next refill deadline.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._listeners: list[Callable[[], None]] = []

    def cancel(self) -> None:
        """Signal cancellation and notify registered listeners."""

        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            listeners = list(self._listeners)
        for listener in listeners:
            listener()

    def is_cancelled(self) -> bool:
        """Return ``True`` once :meth:`cancel` has been called."""

        return self._event.is_set()

    def add_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
