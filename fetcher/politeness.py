"""Politeness controls: fixed pause between consecutive page requests."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Callable, Iterator


class PagePacer:
    """Enforce a minimum gap between the start of consecutive requests."""

    def __init__(
        self,
        delay_seconds: float,
        sleep_fn: Callable[[float], None] | None = None,
        clock_fn: Callable[[], float] | None = None,
    ) -> None:
        """Initialize delay policy with optional test-time clock hooks."""
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")

        self.delay_seconds = delay_seconds

        self._sleep = sleep_fn or time.sleep
        self._clock = clock_fn or time.monotonic

        self._next_allowed: float | None = None

    def wait_turn(self) -> float:
        """Block until the next request may start; return seconds slept."""
        waited = 0.0
        if self._next_allowed is not None:
            remaining = self._next_allowed - self._clock()
            if remaining > 0:
                self._sleep(remaining)
                waited = remaining
        self._next_allowed = self._clock() + self.delay_seconds
        return waited

    def reset(self) -> None:
        """Forget the previous request so the next one starts immediately."""
        self._next_allowed = None

    @contextmanager
    def request_slot(self) -> Iterator[None]:
        """Wait for the next slot, then run the request body."""
        self.wait_turn()
        yield
