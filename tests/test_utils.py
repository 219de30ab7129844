import logging
import random

import pytest

from refy.models import Settings
from refy.utils import configure_logging, flip_coin, fmt_mmss, format_added, format_minute, round_half_up


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "00:00"), (90, "01:30"), (2700, "45:00"), (3661, "61:01"), (-5, "00:00")],
)
def test_fmt_mmss(seconds, expected):
    assert fmt_mmss(seconds) == expected


def test_minute_and_added_formatting():
    assert format_minute(2712) == "45'"
    assert format_minute(0) == "0'"
    assert format_added(90) == "1m 30s added"
    assert format_added(120) == "2m 0s added"
    assert round_half_up(0.5) == 1
    assert round_half_up(1.49) == 1


def test_flip_coin():
    rng = random.Random(7)
    results = {flip_coin(rng) for _ in range(50)}
    assert results == {"Heads", "Tails"}


def test_settings_validation():
    with pytest.raises(ValueError):
        Settings(half_duration=-1)
    with pytest.raises(ValueError):
        Settings(quick_extra_time=(60, 0, 120))
    with pytest.raises(ValueError):
        Settings(theme="neon")
    assert Settings.from_json(None) == Settings()


def test_configure_logging_respects_env(monkeypatch):
    monkeypatch.setenv("REFY_LOG_LEVEL", "debug")
    logger = configure_logging(extra_loggers=["werkzeug"])
    assert logger.name == "refy"
    assert logger.level == logging.DEBUG
    assert logging.getLogger("werkzeug").level == logging.DEBUG

    assert configure_logging(level="warning").level == logging.WARNING
