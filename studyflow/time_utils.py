"""
Time arithmetic for the weekly planner.

Times of day are "HH:MM" strings on a 24-hour clock. Everything here is a
pure function except the clocks, which isolate the one read of "now" so the
rest of the code can be tested with an injected time.
"""

import re
from datetime import datetime, timedelta
from typing import List, Tuple

import dateparser
from pytz import timezone

from .models import DAYS_OF_WEEK

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

# Timetable grid bounds
GRID_START_HOUR = 6
GRID_END_HOUR = 23


class SystemClock:
    """Reads the local wall clock in the configured timezone."""

    def __init__(self, timezone_str: str = "America/Toronto"):
        self.tz = timezone(timezone_str)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def current_day(self) -> str:
        return DAYS_OF_WEEK[self.now().weekday()]

    def current_time(self) -> str:
        now = self.now()
        return format_time(now.hour, now.minute)

    def timestamp_ms(self) -> int:
        return int(self.now().timestamp() * 1000)


class FixedClock(SystemClock):
    """A clock frozen at a given moment. Used by tests and demos."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, minutes: int = 0, seconds: int = 0):
        """Move the frozen moment forward."""
        self.moment = self.moment + timedelta(minutes=minutes, seconds=seconds)


def format_time(hour: int, minute: int) -> str:
    """Format hour and minute as zero-padded "HH:MM"."""
    return f"{hour:02d}:{minute:02d}"


def time_to_minutes(time_str: str) -> int:
    """Convert "HH:MM" to minutes since midnight.

    Raises:
        ValueError: If time_str is not an "HH:MM" string
    """
    match = TIME_PATTERN.match(time_str or "")
    if not match:
        raise ValueError(f"Invalid time (expected HH:MM): {time_str!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    return hours * 60 + minutes


def is_valid_time(time_str: str) -> bool:
    """Check that time_str is "HH:MM" with hour 0-23 and minute 0-59."""
    match = TIME_PATTERN.match(time_str or "") if isinstance(time_str, str) else None
    if not match:
        return False
    return int(match.group(1)) < 24 and int(match.group(2)) < 60


def minutes_to_time(total_minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    hours, minutes = divmod(total_minutes, 60)
    return format_time(hours, minutes)


def format_time_display(time_str: str) -> str:
    """Render "HH:MM" as 12-hour "h:mm AM/PM" (e.g. "14:05" -> "2:05 PM")."""
    total = time_to_minutes(time_str)
    hours, minutes = divmod(total, 60)
    period = "PM" if hours >= 12 else "AM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes:02d} {period}"


def format_duration(minutes: int) -> str:
    """Render a duration as "Xh", "Ym" or "Xh Ym". Zero renders "0m"."""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def get_session_duration(start_time: str, end_time: str) -> int:
    """Minutes between two "HH:MM" times."""
    return time_to_minutes(end_time) - time_to_minutes(start_time)


def get_current_time(clock=None) -> str:
    """Current wall-clock time as "HH:MM"."""
    clock = clock or SystemClock()
    return clock.current_time()


def is_time_past(time_str: str, now: str) -> bool:
    """True if time_str is strictly earlier than now (both "HH:MM")."""
    return time_to_minutes(time_str) < time_to_minutes(now)


def generate_time_slots(interval_minutes: int = 30) -> List[Tuple[int, int, str]]:
    """Generate (hour, minute, "HH:MM") slots for the timetable grid.

    Slots run from 06:00 up to and including 23:00.
    """
    slots = []
    for hour in range(GRID_START_HOUR, GRID_END_HOUR + 1):
        for minute in range(0, 60, interval_minutes):
            if hour == GRID_END_HOUR and minute > 0:
                break
            slots.append((hour, minute, format_time(hour, minute)))
    return slots


def get_time_options() -> List[Tuple[str, str]]:
    """15-minute (value, label) options for time pickers."""
    return [
        (value, format_time_display(value))
        for _, _, value in generate_time_slots(15)
    ]


def parse_time_input(text: str) -> str:
    """Parse user-typed time into "HH:MM".

    Accepts strict "HH:MM"/"H:MM" as well as loose forms like "9am" or
    "2:30 pm".

    Raises:
        ValueError: If the text cannot be read as a time of day
    """
    text = (text or "").strip()
    if is_valid_time(text):
        hours, minutes = divmod(time_to_minutes(text), 60)
        return format_time(hours, minutes)

    parsed = dateparser.parse(text, languages=["en"])
    if parsed is None:
        raise ValueError(f"Could not understand time: {text!r}")
    return format_time(parsed.hour, parsed.minute)
