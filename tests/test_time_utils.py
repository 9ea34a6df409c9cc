"""Unit tests for time arithmetic."""

from datetime import datetime

import pytest

from studyflow.time_utils import (
    FixedClock, time_to_minutes, minutes_to_time, format_time_display,
    format_duration, get_current_time, is_time_past, is_valid_time,
    generate_time_slots, get_time_options, parse_time_input,
)


def test_time_to_minutes():
    """Test time_to_minutes."""
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("21:00") == 1260


def test_time_to_minutes_rejects_malformed():
    """Test time_to_minutes with bad input."""
    with pytest.raises(ValueError):
        time_to_minutes("9.30")
    with pytest.raises(ValueError):
        time_to_minutes("")


def test_minutes_to_time():
    """Test minutes_to_time."""
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(570) == "09:30"
    assert minutes_to_time(1260) == "21:00"


def test_format_time_display():
    """Test 12-hour display."""
    assert format_time_display("00:05") == "12:05 AM"
    assert format_time_display("09:00") == "9:00 AM"
    assert format_time_display("12:00") == "12:00 PM"
    assert format_time_display("14:30") == "2:30 PM"


def test_format_duration():
    """Test duration formatting."""
    assert format_duration(0) == "0m"
    assert format_duration(45) == "45m"
    assert format_duration(120) == "2h"
    assert format_duration(90) == "1h 30m"


def test_is_valid_time():
    """Test time validation."""
    assert is_valid_time("23:59")
    assert not is_valid_time("24:00")
    assert not is_valid_time("10:60")
    assert not is_valid_time(None)


def test_current_time_uses_injected_clock():
    """Test get_current_time with a clock."""
    clock = FixedClock(datetime(2026, 10, 21, 14, 5))
    assert get_current_time(clock) == "14:05"
    assert clock.current_day() == "wednesday"


def test_fixed_clock_advance():
    """Test FixedClock.advance."""
    clock = FixedClock(datetime(2026, 10, 19, 9, 0))
    before = clock.timestamp_ms()
    clock.advance(minutes=5)
    assert clock.current_time() == "09:05"
    assert clock.timestamp_ms() - before == 5 * 60 * 1000


def test_is_time_past():
    """Test is_time_past."""
    assert is_time_past("08:59", "09:00")
    assert not is_time_past("09:00", "09:00")


def test_generate_time_slots():
    """Test the 30-minute grid."""
    slots = generate_time_slots(30)
    assert slots[0] == (6, 0, "06:00")
    assert slots[-1] == (23, 0, "23:00")
    assert len(slots) == 35


def test_get_time_options():
    """Test the 15-minute picker options."""
    options = get_time_options()
    assert options[0] == ("06:00", "6:00 AM")
    assert ("13:15", "1:15 PM") in options


def test_parse_time_input_strict():
    """Test parsing HH:MM input."""
    assert parse_time_input("9:05") == "09:05"
    assert parse_time_input(" 14:30 ") == "14:30"


def test_parse_time_input_loose():
    """Test parsing loose input like 9am."""
    assert parse_time_input("2:30 pm") == "14:30"
    assert parse_time_input("9am") == "09:00"


def test_parse_time_input_rejects_garbage():
    """Test parsing unusable input."""
    with pytest.raises(ValueError):
        parse_time_input("qwerty")
