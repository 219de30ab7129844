import pytest

from refy.services import DurationValidationError, parse_duration


@pytest.mark.parametrize(
    "minutes,seconds,expected",
    [
        ("2", "30", 150),
        (0, 59, 59),
        (" 1 ", "0", 60),
        ("100", "0", 6000),
    ],
)
def test_parse_duration_valid(minutes, seconds, expected):
    assert parse_duration(minutes, seconds) == expected


@pytest.mark.parametrize(
    "minutes,seconds,message",
    [
        ("", "30", "Minutes is required"),
        (None, "1", "Minutes is required"),
        ("2", "70", "Seconds must be between 0 and 59"),
        ("1.5", "0", "Minutes must be a whole number"),
        ("abc", "0", "Minutes must be a whole number"),
        (-1, "30", "Minutes cannot be negative"),
        ("0", "0", "Time must be greater than zero"),
        ("100", "1", "Maximum time is 100 minutes"),
        (True, 0, "Minutes must be a whole number"),
    ],
)
def test_parse_duration_invalid(minutes, seconds, message):
    with pytest.raises(DurationValidationError) as exc_info:
        parse_duration(minutes, seconds)
    assert message in str(exc_info.value)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        parse_duration("x", "0")
