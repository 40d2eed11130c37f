"""Strictly increasing request nonces derived from wall-clock time."""

import time
from collections.abc import Callable
from typing import Optional


def current_time_micros() -> int:
    """Wall-clock time in integer microseconds."""
    return time.time_ns() // 1000


class NonceGenerator:
    """
    Issue nonces that track wall-clock microseconds but never repeat or go
    backwards, even when several are requested within one microsecond.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or current_time_micros
        self._last_issued = 0

    @property
    def last_issued(self) -> int:
        return self._last_issued

    def next(self) -> int:
        candidate = self._clock()
        if candidate <= self._last_issued:
            candidate = self._last_issued + 1
        self._last_issued = candidate
        return candidate
