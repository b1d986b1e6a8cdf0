"""
Countdown Timer

A cancellable, poll-driven countdown. It owns no thread: the game service
polls it with the current time and it fires its callback at most once.
"""

import time
from typing import Callable, Optional


class Countdown:
    """Single-shot countdown that fires ``on_finish`` once unless cancelled."""

    def __init__(self, duration: float, on_finish: Callable[[], None],
                 clock: Callable[[], float] = time.monotonic):
        if duration <= 0:
            raise ValueError("Countdown duration must be positive")
        self.duration = duration
        self.on_finish = on_finish
        self.clock = clock
        self.deadline: Optional[float] = None
        self.finished = False
        self.cancelled = False

    @property
    def is_active(self) -> bool:
        return self.deadline is not None and not self.finished and not self.cancelled

    def start(self) -> "Countdown":
        self.deadline = self.clock() + self.duration
        self.finished = False
        self.cancelled = False
        return self

    def remaining(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds left, or None when not running."""
        if not self.is_active:
            return None
        now = self.clock() if now is None else now
        return max(0.0, self.deadline - now)

    def cancel(self) -> bool:
        """Stop the countdown. Returns True only for the call that actually cancelled it."""
        if not self.is_active:
            return False
        self.cancelled = True
        return True

    def poll(self, now: Optional[float] = None) -> bool:
        """Fire ``on_finish`` if the deadline has passed. Returns True when it fired."""
        if not self.is_active:
            return False
        now = self.clock() if now is None else now
        if now < self.deadline:
            return False
        self.finished = True
        self.on_finish()
        return True
