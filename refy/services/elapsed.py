"""Elapsed-time accumulator: true game time, independent of the countdown."""

import logging
from typing import Dict, Optional

from ..utils import round_half_up

logger = logging.getLogger(__name__)


class ElapsedAccumulator:
    """
    Tracks the total seconds of play that have actually elapsed.

    The countdown shown to the referee can be topped up with stoppage time or
    reset by hand; neither changes how much of the match has been played. The
    accumulator only advances on genuine clock ticks and is what every event
    is stamped with.

    Two snapshots are kept so a manual reset of the visible countdown can
    rewind the total to the moment the current period of play began:

    - ``half_start_snapshot``: total when the current half's play started
    - ``extra_time_start_snapshot``: total when stoppage time was granted

    ``custom_half_durations`` holds the configured length of extended halves
    (3 and 4).
    """

    def __init__(self):
        self.total_elapsed_seconds: float = 0.0
        self.half_start_snapshot: float = 0.0
        self.extra_time_start_snapshot: Optional[float] = None
        self.custom_half_durations: Dict[int, int] = {}

    def advance(self, seconds: float = 1) -> None:
        if seconds < 0:
            raise ValueError("Elapsed time only moves forward")
        self.total_elapsed_seconds += seconds

    def snapshot_at_half_start(self) -> None:
        self.half_start_snapshot = self.total_elapsed_seconds
        self.extra_time_start_snapshot = None

    def snapshot_at_extra_time_start(self) -> None:
        self.extra_time_start_snapshot = self.total_elapsed_seconds

    def restore_to_half_start(self) -> None:
        logger.debug(
            "Restoring elapsed time %.1f -> %.1f (half start)",
            self.total_elapsed_seconds, self.half_start_snapshot,
        )
        self.total_elapsed_seconds = self.half_start_snapshot

    def restore_to_extra_time_start(self) -> None:
        if self.extra_time_start_snapshot is None:
            self.restore_to_half_start()
            return
        logger.debug(
            "Restoring elapsed time %.1f -> %.1f (extra time start)",
            self.total_elapsed_seconds, self.extra_time_start_snapshot,
        )
        self.total_elapsed_seconds = self.extra_time_start_snapshot

    def current_game_time(self) -> int:
        """Elapsed play rounded to the nearest whole second."""
        return max(0, round_half_up(self.total_elapsed_seconds))

    def seed(self, seconds: float, half_start: Optional[float] = None) -> None:
        """
        Start a session from a known game time (used after loading a match).

        Args:
            seconds: Game time reached so far
            half_start: Game time when the current half's play began
                (defaults to ``seconds``)
        """
        self.total_elapsed_seconds = max(0.0, float(seconds))
        baseline = self.total_elapsed_seconds if half_start is None else float(half_start)
        self.half_start_snapshot = min(max(0.0, baseline), self.total_elapsed_seconds)
        self.extra_time_start_snapshot = None

    def reset(self) -> None:
        self.total_elapsed_seconds = 0.0
        self.half_start_snapshot = 0.0
        self.extra_time_start_snapshot = None
        self.custom_half_durations.clear()

    def to_json(self) -> dict:
        return {
            "total_elapsed_seconds": self.total_elapsed_seconds,
            "half_start_snapshot": self.half_start_snapshot,
            "extra_time_start_snapshot": self.extra_time_start_snapshot,
            "custom_half_durations": {str(k): v for k, v in self.custom_half_durations.items()},
        }
