"""
liftstats — Rest Timer

Countdown between sets. The deadline lives on a monotonic clock and the
owner drives it by calling `poll()` (from a UI refresh, a loop, a scheduler
tick); the completion callback fires once, on the first poll at or past the
deadline. `stop()` cancels without firing.
"""
import math
import time
from typing import Callable

from liftstats.config import DEFAULT_REST_SECONDS


class RestTimer:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._deadline: float | None = None
        self._on_complete: Callable[[], None] | None = None

    @property
    def is_active(self) -> bool:
        return self._deadline is not None

    def start(self, seconds: float = DEFAULT_REST_SECONDS, on_complete: Callable[[], None] | None = None) -> None:
        """(Re)start the countdown; replaces any pending callback."""
        self._on_complete = on_complete
        if seconds <= 0:
            self._deadline = None
            return
        self._deadline = self._clock() + seconds

    def adjust(self, delta_seconds: float) -> None:
        """Add or remove time; the remaining time never drops below 0."""
        if self._deadline is None:
            return
        now = self._clock()
        self._deadline = max(now, self._deadline + delta_seconds)

    def stop(self) -> None:
        self._deadline = None
        self._on_complete = None

    def remaining(self) -> int:
        """Whole seconds left (rounded up); 0 when idle."""
        if self._deadline is None:
            return 0
        return max(0, math.ceil(self._deadline - self._clock()))

    def poll(self) -> bool:
        """Fire the completion callback if the deadline has passed. Returns True when it fired."""
        if self._deadline is None or self._clock() < self._deadline:
            return False
        callback = self._on_complete
        self._deadline = None
        self._on_complete = None
        if callback is not None:
            callback()
        return True
