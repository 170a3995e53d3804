"""Countdown timer for timed writing sprints."""

from __future__ import annotations

from typing import Callable, Optional

from inkwell.config import DEFAULT_TIMER_MINUTES
from inkwell.runtime import telemetry

MIN_MINUTES = 1
MAX_MINUTES = 120


def _clamp(value: int) -> int:
    return max(MIN_MINUTES, min(MAX_MINUTES, value))


def format_seconds(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


class CountdownTimer:
    """Counts down from ``minutes``; the host drives it with :meth:`tick`."""

    def __init__(
        self,
        minutes: int = DEFAULT_TIMER_MINUTES,
        *,
        on_expire: Optional[Callable[[], None]] = None,
    ) -> None:
        self.minutes = _clamp(minutes)
        self.seconds_left = self.minutes * 60
        self.running = False
        self.on_expire = on_expire

    def adjust(self, delta: int) -> int:
        """Change the configured minutes; ignored while running."""

        if not self.running:
            self.minutes = _clamp(self.minutes + delta)
            self.seconds_left = self.minutes * 60
        return self.minutes

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        telemetry.record_event("timer.start", data={"minutes": self.minutes})

    def stop(self) -> None:
        self.running = False
        self.seconds_left = self.minutes * 60

    def toggle(self) -> bool:
        if self.running:
            self.stop()
        else:
            self.start()
        return self.running

    def tick(self, seconds: int = 1) -> bool:
        """Advance the countdown; ``True`` once it reaches zero."""

        if not self.running:
            return False
        self.seconds_left = max(0, self.seconds_left - seconds)
        if self.seconds_left > 0:
            return False
        self.stop()
        telemetry.record_event("timer.expired", data={"minutes": self.minutes})
        if self.on_expire is not None:
            self.on_expire()
        return True

    def display(self) -> str:
        if self.running:
            return format_seconds(self.seconds_left)
        return f"{self.minutes}:00"


__all__ = ["CountdownTimer", "MAX_MINUTES", "MIN_MINUTES", "format_seconds"]
