"""Countdown clock for the current half."""

import logging
from typing import Callable, Optional

from .tick_driver import ManualTickDriver, TickDriver

logger = logging.getLogger(__name__)


class Clock:
    """
    Countdown timer ticking once per second while active.

    The clock holds the remaining seconds and an active flag. It is driven by
    a ``TickDriver``; ``tick`` is the driver callback. Two listeners can be
    attached:

    - ``on_tick`` runs after every counted second, before the expiry check,
      so elapsed-time bookkeeping is up to date when expiry is handled.
    - ``on_expired`` runs once when the countdown reaches zero. It is re-armed
      by ``reset`` and ``add_time``.
    """

    def __init__(
        self,
        duration: int = 0,
        driver: Optional[TickDriver] = None,
        on_tick: Optional[Callable[[], None]] = None,
        on_expired: Optional[Callable[[], None]] = None,
    ):
        if duration < 0:
            raise ValueError("Clock duration cannot be negative")
        self.remaining_seconds = int(duration)
        self.is_active = False
        self.driver = driver or ManualTickDriver()
        self.on_tick = on_tick
        self.on_expired = on_expired
        self._expiry_notified = False

    def start(self) -> bool:
        """Start counting down. Returns False if there is no time left."""
        if self.remaining_seconds <= 0:
            return False
        if not self.is_active:
            self.is_active = True
            self.driver.start(self.tick)
        return True

    def pause(self) -> None:
        """Stop counting down. Safe to call repeatedly."""
        self.is_active = False
        self.driver.stop()

    def reset(self, new_duration: int) -> None:
        """Pause and set the remaining time to ``new_duration``."""
        if new_duration < 0:
            raise ValueError("Clock duration cannot be negative")
        self.pause()
        self.remaining_seconds = int(new_duration)
        self._expiry_notified = False

    def add_time(self, extra_seconds: int) -> None:
        """Add time to the countdown and resume it."""
        if extra_seconds <= 0:
            raise ValueError("Added time must be positive")
        self.remaining_seconds += int(extra_seconds)
        self._expiry_notified = False
        self.start()

    def tick(self) -> None:
        """Count one elapsed second. Ignored while paused."""
        if not self.is_active:
            return
        self.remaining_seconds = max(0, self.remaining_seconds - 1)
        if self.on_tick is not None:
            self.on_tick()
        if self.remaining_seconds == 0:
            self.pause()
            if not self._expiry_notified:
                self._expiry_notified = True
                logger.debug("Countdown reached zero")
                if self.on_expired is not None:
                    self.on_expired()

    def to_json(self) -> dict:
        return {"remaining_seconds": self.remaining_seconds, "is_active": self.is_active}
