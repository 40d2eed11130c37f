"""
Fixed-interval driver for trading cycles.

Cycles run strictly one after another on the calling thread. Ticks that
elapse while a cycle is still running are skipped rather than queued, so a
slow exchange call only delays the next cycle.
"""

import threading
import time
from collections.abc import Callable
from typing import Any, Optional

import structlog

from .errors import ConfigurationError

logger = structlog.get_logger(__name__)


class PeriodicDriver:
    """Invoke ``callback`` every ``interval_seconds`` without overlap."""

    def __init__(
        self,
        callback: Callable[[], Any],
        interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Optional[Callable[[float], Any]] = None
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self.callback = callback
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._stop_event = threading.Event()
        self._sleep = sleep or self._stop_event.wait
        self.ticks_run = 0
        self.ticks_skipped = 0

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self, *_: Any) -> None:
        """Request the loop to end after the current cycle (signal-handler safe)."""
        logger.info("Stop requested", ticks_run=self.ticks_run)
        self._stop_event.set()

    def run_once(self) -> Any:
        """Run a single cycle; unexpected errors are logged, not raised."""
        self.ticks_run += 1
        try:
            return self.callback()
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(
                "Cycle raised unexpectedly",
                tick=self.ticks_run,
                error=str(e),
                error_type=type(e).__name__
            )
            return None

    def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Run cycles until stop() is called or max_ticks cycles have run.

        Args:
            max_ticks: Optional cap on cycles run (used by --once and tests)
        """
        next_tick = self._clock()

        while not self.stopped:
            self.run_once()
            if max_ticks is not None and self.ticks_run >= max_ticks:
                break

            next_tick += self.interval_seconds
            now = self._clock()
            if now > next_tick:
                missed = int((now - next_tick) // self.interval_seconds) + 1
                self.ticks_skipped += missed
                next_tick += missed * self.interval_seconds
                logger.warning(
                    "Cycle overran its interval, skipping ticks",
                    skipped=missed,
                    interval_seconds=self.interval_seconds
                )

            self._sleep(max(0.0, next_tick - now))
