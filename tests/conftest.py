"""Shared fixtures for the planner tests."""

from datetime import datetime

import pytest

from studyflow.session_store import SessionStore
from studyflow.storage import MemoryStorage
from studyflow.time_utils import FixedClock


@pytest.fixture
def clock():
    # Monday 19 October 2026, 09:15
    return FixedClock(datetime(2026, 10, 19, 9, 15))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage, clock):
    return SessionStore(storage, clock=clock)


def session_fields(day="monday", start="09:00", end="10:00", course="Linear Algebra",
                   session_type="lecture", intensity="medium", notes=None):
    """Build a create() payload with sensible defaults."""
    return {
        "course_name": course,
        "day": day,
        "start_time": start,
        "end_time": end,
        "session_type": session_type,
        "intensity": intensity,
        "notes": notes,
    }


@pytest.fixture
def make_fields():
    return session_fields
