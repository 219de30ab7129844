"""
Utilities package for the Referee Sideline Assistant.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, format_minute, format_added, now_ts, round_half_up
from .coin_flip import flip_coin
from .logging_config import configure_logging
from .constants import (
    APP_TITLE, DEFAULT_HALF_DURATION, DEFAULT_EXTRA_HALF_DURATION,
    DEFAULT_QUICK_EXTRA_TIME, MAX_DURATION_SECONDS, VIBRATION_PATTERN
)

__all__ = [
    "fmt_mmss", "format_minute", "format_added", "now_ts", "round_half_up",
    "flip_coin", "configure_logging", "APP_TITLE", "DEFAULT_HALF_DURATION",
    "DEFAULT_EXTRA_HALF_DURATION", "DEFAULT_QUICK_EXTRA_TIME",
    "MAX_DURATION_SECONDS", "VIBRATION_PATTERN"
]
