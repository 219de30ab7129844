"""Referee settings record, merged over defaults when loaded."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from ..utils.constants import (
    DEFAULT_EXTRA_HALF_DURATION,
    DEFAULT_HALF_DURATION,
    DEFAULT_QUICK_EXTRA_TIME,
    THEMES,
)


@dataclass
class Settings:
    """
    User settings.

    Only the duration fields are interpreted by the match engine; ``vibration``
    gates the haptic cue and ``theme`` is passed through for the UI.
    """
    half_duration: int = DEFAULT_HALF_DURATION
    extra_half_duration: int = DEFAULT_EXTRA_HALF_DURATION
    quick_extra_time: Tuple[int, int, int] = DEFAULT_QUICK_EXTRA_TIME
    vibration: bool = True
    theme: str = "light"

    def __post_init__(self) -> None:
        if self.half_duration < 0 or self.extra_half_duration < 0:
            raise ValueError("Durations cannot be negative")
        self.quick_extra_time = tuple(int(value) for value in self.quick_extra_time)
        if len(self.quick_extra_time) != 3 or min(self.quick_extra_time) <= 0:
            raise ValueError("Quick extra time needs three positive presets")
        if self.theme not in THEMES:
            raise ValueError(f"Unknown theme: {self.theme}")

    def to_json(self) -> Dict[str, Any]:
        data = asdict(self)
        data["quick_extra_time"] = list(self.quick_extra_time)
        return data

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        """
        Merge a stored payload over the defaults.

        Fields missing from older payloads pick up their defaults; unknown
        keys are ignored.
        """
        merged = cls().to_json()
        for key, value in (data or {}).items():
            if key in merged and value is not None:
                merged[key] = value
        return cls(
            half_duration=int(merged["half_duration"]),
            extra_half_duration=int(merged["extra_half_duration"]),
            quick_extra_time=tuple(merged["quick_extra_time"]),
            vibration=bool(merged["vibration"]),
            theme=str(merged["theme"]),
        )
