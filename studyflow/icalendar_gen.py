"""
iCalendar generation module.

Turns the weekly template into concrete, dated events for one chosen week so
it can be imported into a calendar app. Events are not recurring.
"""

import uuid
from datetime import date, datetime, time, timedelta
from typing import List

from icalendar import Calendar, Event
from pytz import timezone

from .models import (
    StudySession, DAYS_OF_WEEK, SESSION_TYPE_LABELS, INTENSITY_LABELS
)
from .time_utils import time_to_minutes


def week_monday(any_day: date) -> date:
    """Monday of the week containing any_day."""
    return any_day - timedelta(days=any_day.weekday())


class ICalendarGenerator:
    """Generates iCalendar (.ics) files from study sessions."""

    def __init__(self, timezone_str: str = "America/Toronto"):
        """Initialize calendar generator.

        Args:
            timezone_str: Timezone string (default: America/Toronto)
        """
        self.tz = timezone(timezone_str)

    def generate_week_calendar(self, sessions: List[StudySession],
                               week_start: date) -> Calendar:
        """Generate a calendar with one event per session.

        Args:
            sessions: Sessions to export
            week_start: Any date in the target week; events are placed in that
                        week starting from its Monday

        Returns:
            Calendar object ready for export
        """
        monday = week_monday(week_start)

        cal = Calendar()
        cal.add('prodid', '-//StudyFlow Weekly Planner//EN')
        cal.add('version', '2.0')
        cal.add('calscale', 'GREGORIAN')
        cal.add('method', 'PUBLISH')

        for session in sessions:
            cal.add_component(self._create_session_event(session, monday))

        return cal

    def _to_datetime(self, day_date: date, time_str: str) -> datetime:
        hours, minutes = divmod(time_to_minutes(time_str), 60)
        return self.tz.localize(datetime.combine(day_date, time(hours, minutes)))

    def _create_session_event(self, session: StudySession, monday: date) -> Event:
        """Create the event for one session in the week starting at monday."""
        session_date = monday + timedelta(days=DAYS_OF_WEEK.index(session.day))

        event = Event()
        event.add('uid', f"{uuid.uuid4()}@studyflow")
        event.add('dtstart', self._to_datetime(session_date, session.start_time))
        event.add('dtend', self._to_datetime(session_date, session.end_time))
        event.add('summary', f"{SESSION_TYPE_LABELS[session.session_type]}: {session.course_name}")

        desc_parts = [f"Intensity: {INTENSITY_LABELS[session.intensity]}"]
        if session.notes:
            desc_parts.append(session.notes)
        event.add('description', "\n".join(desc_parts))
        event.add('categories', [session.session_type])

        return event

    def export_to_file(self, calendar: Calendar, filepath: str):
        """Export calendar to .ics file.

        Args:
            calendar: Calendar object
            filepath: Path to output file
        """
        with open(filepath, 'wb') as f:
            f.write(calendar.to_ical())
