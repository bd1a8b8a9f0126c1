"""Rate limiting for CRPT API submissions."""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from datetime import timedelta
from threading import Condition
from typing import Callable, Deque

from .cancellation import CancellationToken
from .errors import Cancelled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateBudget:
    """At most ``max_requests`` admissions in any trailing ``window_seconds``."""

    window_seconds: float
    max_requests: int

    def __post_init__(self) -> None:
        if isinstance(self.max_requests, bool) or not isinstance(self.max_requests, int):
            raise ValueError("max_requests must be an integer")
        if self.max_requests <= 0:
            raise ValueError("max_requests must be greater than zero")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be greater than zero")

    @classmethod
    def from_timedelta(cls, window: timedelta | float, max_requests: int) -> "RateBudget":
        """Build a budget from a :class:`~datetime.timedelta` or a number of seconds."""

        if isinstance(window, timedelta):
            seconds = window.total_seconds()
        else:
            seconds = float(window)
        return cls(window_seconds=seconds, max_requests=max_requests)


class RateLimiter:
    """Token bucket limiting admissions to a :class:`RateBudget`.

    The bucket starts full. Each grant spends one token, and that token is
    returned exactly one window after it was granted, so no trailing window
    ever holds more than ``max_requests`` grants.
    """

    def __init__(
        self,
        budget: RateBudget,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize rate limiter.

        Args:
            budget: Window length and number of admissions allowed per window
            clock: Monotonic time source in seconds
        """
        self.budget = budget
        self._clock = clock
        self._granted: Deque[float] = deque()
        self._condition = Condition()

    def _expire(self, now: float) -> None:
        window = self.budget.window_seconds
        while self._granted and now - self._granted[0] >= window:
            self._granted.popleft()

    def _try_grant(self, now: float) -> bool:
        self._expire(now)
        if len(self._granted) < self.budget.max_requests:
            self._granted.append(now)
            return True
        return False

    def _wake(self) -> None:
        with self._condition:
            self._condition.notify_all()

    def acquire(
        self,
        cancel_token: CancellationToken | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Block until a slot is granted.

        Args:
            cancel_token: Token that releases the caller without a slot
            timeout: Maximum number of seconds to wait

        Raises:
            Cancelled: If the token is cancelled or the timeout elapses first
        """
        deadline = None if timeout is None else self._clock() + timeout
        if cancel_token is not None:
            cancel_token.add_listener(self._wake)
        try:
            with self._condition:
                waiting = False
                while True:
                    # Checked under the same lock as the grant.
                    if cancel_token is not None and cancel_token.is_cancelled():
                        logger.debug("Cancelled while waiting for a rate-limit slot")
                        raise Cancelled("cancelled while waiting for a rate-limit slot")

                    now = self._clock()
                    if self._try_grant(now):
                        return

                    wait_for = self._granted[0] + self.budget.window_seconds - now
                    if deadline is not None:
                        remaining = deadline - now
                        if remaining <= 0:
                            logger.debug("Timed out waiting for a rate-limit slot")
                            raise Cancelled(
                                f"no rate-limit slot became available within {timeout}s"
                            )
                        wait_for = min(wait_for, remaining)

                    if not waiting:
                        logger.debug(
                            "Rate limit of %d per %.3fs reached, waiting %.3fs",
                            self.budget.max_requests,
                            self.budget.window_seconds,
                            wait_for,
                        )
                        waiting = True
                    self._condition.wait(wait_for)
        finally:
            if cancel_token is not None:
                cancel_token.remove_listener(self._wake)

    def try_acquire(self) -> bool:
        """Grant a slot without blocking, returning ``False`` when none is free."""

        with self._condition:
            return self._try_grant(self._clock())

    def available(self) -> int:
        """Return the number of slots that could be granted right now."""

        with self._condition:
            self._expire(self._clock())
            return self.budget.max_requests - len(self._granted)
