"""Unit tests for calendar export."""

from datetime import date

from icalendar import Calendar

from studyflow.icalendar_gen import ICalendarGenerator, week_monday


def test_week_monday():
    """Test Monday lookup for a date."""
    assert week_monday(date(2026, 10, 19)) == date(2026, 10, 19)
    assert week_monday(date(2026, 10, 22)) == date(2026, 10, 19)
    assert week_monday(date(2026, 10, 25)) == date(2026, 10, 19)


def test_generate_week_calendar(store, make_fields):
    """Test calendar generation for one week."""
    store.create(make_fields(day="monday", start="09:00", end="10:30", course="Linear Algebra",
                             notes="Chapter 5"))
    store.create(make_fields(day="sunday", start="15:00", end="16:30", course="Data Structures",
                             session_type="personal", intensity="light"))

    generator = ICalendarGenerator(timezone_str="America/Toronto")
    cal = generator.generate_week_calendar(store.sessions, date(2026, 10, 21))
    events = [c for c in cal.walk() if c.name == "VEVENT"]

    assert len(events) == 2
    first, second = events
    assert str(first.get("summary")) == "Lecture: Linear Algebra"
    assert first.decoded("dtstart").date() == date(2026, 10, 19)
    assert first.decoded("dtstart").hour == 9
    assert first.decoded("dtend").minute == 30
    assert "Chapter 5" in str(first.get("description"))
    assert str(second.get("summary")) == "Personal Study: Data Structures"
    assert second.decoded("dtstart").date() == date(2026, 10, 25)
    assert "rrule" not in first


def test_export_to_file(tmp_path, store, make_fields):
    """Test writing the calendar to disk."""
    store.create(make_fields())
    generator = ICalendarGenerator()
    cal = generator.generate_week_calendar(store.sessions, date(2026, 10, 19))
    path = tmp_path / "week.ics"
    generator.export_to_file(cal, str(path))

    parsed = Calendar.from_ical(path.read_bytes())
    assert len([c for c in parsed.walk() if c.name == "VEVENT"]) == 1
