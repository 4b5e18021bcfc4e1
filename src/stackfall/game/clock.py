from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class GravityClock:
    """Accumulates host time and reports when gravity ticks are due.

    A new interval passed to `reschedule` mid-interval never alters the
    interval already in progress; it takes effect once that interval has
    elapsed. At a tick boundary (right after `consume`) it applies at once.
    """

    def __init__(self, interval_ms: float) -> None:
        self.interval_ms = self._checked(interval_ms)
        self.elapsed_ms = 0.0
        self.paused = False
        self._pending: Optional[float] = None

    @staticmethod
    def _checked(interval_ms: float) -> float:
        interval_ms = float(interval_ms)
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        return interval_ms

    @property
    def pending_interval_ms(self) -> Optional[float]:
        return self._pending

    def advance(self, dt_ms: float) -> None:
        if self.paused or dt_ms <= 0:
            return
        self.elapsed_ms += dt_ms

    def consume(self) -> bool:
        """Take one due tick, if any."""
        if self.paused or self.elapsed_ms < self.interval_ms:
            return False
        self.elapsed_ms -= self.interval_ms
        if self._pending is not None:
            logger.debug("Gravity interval %.1fms -> %.1fms", self.interval_ms, self._pending)
            self.interval_ms = self._pending
            self._pending = None
        return True

    def reschedule(self, interval_ms: float, at_boundary: bool = False) -> None:
        interval_ms = self._checked(interval_ms)
        if at_boundary:
            logger.debug("Gravity interval %.1fms -> %.1fms", self.interval_ms, interval_ms)
            self.interval_ms = interval_ms
            self._pending = None
        else:
            self._pending = interval_ms

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def cancel(self) -> None:
        """Drop accumulated time and any pending interval."""
        self.elapsed_ms = 0.0
        self._pending = None

    def reset(self, interval_ms: float) -> None:
        self.cancel()
        self.interval_ms = self._checked(interval_ms)
        self.paused = False
