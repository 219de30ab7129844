"""
Validation of minutes/seconds duration input.

Used for custom extra time and for the length of an extended half. Invalid
input is reported with a descriptive message and never clamped.
"""
from typing import Union

from ..utils.constants import MAX_DURATION_SECONDS, MAX_SECONDS_COMPONENT

DurationField = Union[int, str, None]


class DurationValidationError(ValueError):
    """Raised when a minutes/seconds entry cannot be accepted."""
    pass


def parse_component(value: DurationField, label: str) -> int:
    """
    Parse a single minutes or seconds field.

    Args:
        value: Raw field value (int or text as typed)
        label: Field name used in error messages

    Returns:
        The whole, non-negative number

    Raises:
        DurationValidationError: If the field is blank or not a whole number
    """
    if isinstance(value, bool):
        raise DurationValidationError(f"{label} must be a whole number")
    if value is None or (isinstance(value, str) and not value.strip()):
        raise DurationValidationError(f"{label} is required")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
    else:
        raise DurationValidationError(f"{label} must be a whole number")
    if number < 0:
        raise DurationValidationError(f"{label} cannot be negative")
    return number


def validate_total(total: int) -> int:
    """Check a total in seconds is within (0, MAX_DURATION_SECONDS]."""
    if total <= 0:
        raise DurationValidationError("Time must be greater than zero")
    if total > MAX_DURATION_SECONDS:
        raise DurationValidationError(
            f"Maximum time is {MAX_DURATION_SECONDS // 60} minutes"
        )
    return total


def parse_duration(minutes: DurationField, seconds: DurationField) -> int:
    """
    Convert minutes and seconds fields into a total number of seconds.

    Raises:
        DurationValidationError: For blank or non-integer fields, seconds
            above 59, or a total outside 1..6000 seconds
    """
    mins = parse_component(minutes, "Minutes")
    secs = parse_component(seconds, "Seconds")
    if secs > MAX_SECONDS_COMPONENT:
        raise DurationValidationError(
            f"Seconds must be between 0 and {MAX_SECONDS_COMPONENT}"
        )
    return validate_total(mins * 60 + secs)
