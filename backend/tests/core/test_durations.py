"""Duration Parsing tests."""

from datetime import timedelta

import pytest

from app.core.durations import parse_duration


@pytest.mark.parametrize("value, expected", [
    ("7d", timedelta(days=7)),
    ("12h", timedelta(hours=12)),
    ("30m", timedelta(minutes=30)),
    ("45s", timedelta(seconds=45)),
    ("3600", timedelta(hours=1)),
    (" 2D ", timedelta(days=2)),
])
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "0", "0d", "7w", "-1h", "1.5h", "d"])
def test_parse_duration_rejects(value):
    with pytest.raises(ValueError):
        parse_duration(value)
