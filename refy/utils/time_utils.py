"""
Utility functions for the Referee Sideline Assistant.

This module contains common time helpers used throughout the application.
"""
import math
import time


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest whole second (.5 rounds up)."""
    return int(math.floor(value + 0.5))


def fmt_mmss(seconds: float) -> str:
    """
    Format seconds as MM:SS string.
    
    Args:
        seconds: Number of seconds to format (rounded to the nearest second)
        
    Returns:
        Formatted time string in MM:SS format
        
    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    total = max(0, round_half_up(seconds))
    m = total // 60
    s = total % 60
    return f"{m:02d}:{s:02d}"


def format_minute(seconds: float) -> str:
    """
    Format game time as the match minute shown in reports.

    Example:
        >>> format_minute(2712)
        "45'"
    """
    total = max(0, round_half_up(seconds or 0))
    return f"{total // 60}'"


def format_added(seconds: int) -> str:
    """Describe granted stoppage time, e.g. ``'1m 30s added'``."""
    m, s = divmod(int(seconds), 60)
    return f"{m}m {s}s added"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.
    
    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()
