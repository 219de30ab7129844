"""Haptic feedback collaborators."""

import logging
from typing import List, Protocol, Sequence

logger = logging.getLogger(__name__)


class Haptics(Protocol):
    """Fire-and-forget vibration trigger."""

    def vibrate(self, pattern: Sequence[int]) -> None:
        ...


class NullHaptics:
    """Used when the host has no vibration support."""

    def vibrate(self, pattern: Sequence[int]) -> None:
        logger.debug("Vibration requested (%s) but no device is attached", list(pattern))


class RecordingHaptics:
    """Remembers every requested pattern; handy for UIs that poll and for tests."""

    def __init__(self):
        self.patterns: List[List[int]] = []

    def vibrate(self, pattern: Sequence[int]) -> None:
        self.patterns.append(list(pattern))

    def drain(self) -> List[List[int]]:
        """Return and forget the recorded patterns."""
        patterns, self.patterns = self.patterns, []
        return patterns
