from datetime import time

import pytest

from src.attendease.attendease.common.datetime_utils import format_clock, parse_clock, parse_time_slot
from src.attendease.attendease.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("9:00 AM", time(9, 0)),
        ("9:00 am", time(9, 0)),
        ("12:00 PM", time(12, 0)),
        ("12:30 AM", time(0, 30)),
        ("1:00PM", time(13, 0)),
        ("14:30", time(14, 30)),
        ("09:05", time(9, 5)),
    ],
)
def test_parse_clock_formats(raw, expected):
    assert parse_clock(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "25:00", "9 o'clock", "13:00 PM"])
def test_parse_clock_rejects_garbage(raw):
    with pytest.raises(ValidationError):
        parse_clock(raw)


def test_format_clock_round_trips_grid_labels():
    assert format_clock(time(0, 15)) == "12:15 AM"
    assert format_clock(time(12, 0)) == "12:00 PM"
    assert format_clock(time(16, 5)) == "4:05 PM"


def test_parse_time_slot():
    assert parse_time_slot("9:00 AM - 10:00 AM") == (time(9, 0), time(10, 0))
    assert parse_time_slot("14:00-15:30") == (time(14, 0), time(15, 30))


def test_parse_time_slot_needs_two_parts():
    with pytest.raises(ValidationError):
        parse_time_slot("9:00 AM")


@pytest.mark.parametrize("raw", [900, 9.5, ["9:00 AM"], {"h": 9}])
def test_parse_clock_rejects_non_strings(raw):
    with pytest.raises(ValidationError):
        parse_clock(raw)


@pytest.mark.parametrize("raw", [["9:00 AM", "10:00 AM"], 900, {"start": "9:00 AM"}])
def test_parse_time_slot_rejects_non_strings(raw):
    with pytest.raises(ValidationError):
        parse_time_slot(raw)
