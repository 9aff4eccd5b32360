"""Unit tests for duration and timestamp formatting."""

from datetime import datetime

import pytest

from note_timer.formatting import format_duration, format_timestamp, parse_timestamp


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0s"),
        (59, "59s"),
        (60, "1m"),
        (61, "1m1s"),
        (303, "5m3s"),
        (3599, "59m59s"),
        (3600, "1h"),
        (3601, "1h"),
        (3661, "1h1m"),
        (7325, "2h2m"),
        (90000, "25h"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_duration_floors_fractional_seconds():
    assert format_duration(59.9) == "59s"


def test_format_duration_rejects_negative_values():
    with pytest.raises(ValueError):
        format_duration(-1)


def test_timestamp_round_trip():
    value = datetime(2024, 2, 29, 23, 5, 9)
    assert format_timestamp(value) == "2024-02-29 23:05:09"
    assert parse_timestamp(" 2024-02-29 23:05:09 ") == value


def test_parse_timestamp_rejects_impossible_dates():
    with pytest.raises(ValueError):
        parse_timestamp("2023-02-29 10:00:00")
