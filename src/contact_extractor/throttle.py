"""Minimum-interval gate shared by every extraction call."""

from __future__ import annotations

import time
from collections.abc import Callable
from threading import Lock

from .errors import RateLimited

DEFAULT_MIN_INTERVAL = 5.0

Clock = Callable[[], float]


class ThrottleGate:
    """Reject calls that arrive less than ``min_interval`` seconds apart.

    Only calls that pass the gate move the window; a rejected call leaves the
    stored timestamp untouched. Check and update happen under one lock.
    """

    def __init__(
        self, min_interval: float = DEFAULT_MIN_INTERVAL, clock: Clock = time.monotonic
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0.")
        self._min_interval = min_interval
        self._clock = clock
        self._last_call: float | None = None
        self._lock = Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def last_call(self) -> float | None:
        return self._last_call

    def check_and_arm(self, now: float | None = None) -> None:
        """Record ``now`` as the last call, or raise RateLimited without side effects."""
        with self._lock:
            current = self._clock() if now is None else now
            if self._last_call is not None:
                elapsed = current - self._last_call
                if elapsed < self._min_interval:
                    raise RateLimited(self._min_interval - elapsed)
            self._last_call = current
