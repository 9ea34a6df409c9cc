"""Unit tests for data models."""

from studyflow.models import (
    StudySession, FocusSummary, TimeConflict, DAYS_OF_WEEK, DAY_FULL_LABELS,
    serialize_session, deserialize_session, serialize_conflict,
)


def make_session(**overrides):
    data = dict(
        id="abc",
        course_name="Physics 201",
        day="tuesday",
        start_time="08:00",
        end_time="09:30",
        session_type="lecture",
        intensity="medium",
    )
    data.update(overrides)
    return StudySession(**data)


def test_study_session_defaults():
    """Test StudySession optional fields."""
    session = make_session()
    assert session.notes is None
    assert session.created_at == 0
    assert session.updated_at == 0


def test_days_of_week_order():
    """Monday comes first and there are exactly seven days."""
    assert DAYS_OF_WEEK[0] == "monday"
    assert DAYS_OF_WEEK[-1] == "sunday"
    assert len(DAYS_OF_WEEK) == 7
    assert DAY_FULL_LABELS["wednesday"] == "Wednesday"


def test_session_serialization():
    """Test serialization helpers."""
    session = make_session(notes="Lab report", created_at=100, updated_at=200)
    data = serialize_session(session)
    assert data["course_name"] == "Physics 201"
    assert data["session_type"] == "lecture"
    assert deserialize_session(data) == session


def test_deserialize_missing_optional_fields():
    """Old records without notes or timestamps still load."""
    data = serialize_session(make_session())
    del data["notes"]
    del data["created_at"]
    session = deserialize_session(data)
    assert session.notes is None
    assert session.created_at == 0


def test_serialize_conflict():
    """Test conflict serialization."""
    existing = make_session(id="one")
    candidate = make_session(id="new", start_time="09:00", end_time="10:00")
    data = serialize_conflict(TimeConflict(existing=existing, candidate=candidate, overlap_minutes=30))
    assert data["existing"]["id"] == "one"
    assert data["candidate"]["id"] == "new"
    assert data["overlap_minutes"] == 30


def test_focus_summary_progress():
    """Test FocusSummary progress percentage."""
    summary = FocusSummary(None, None, None, completed_count=1, total_count=4)
    assert summary.progress_percent == 25.0
    empty = FocusSummary(None, None, None, completed_count=0, total_count=0)
    assert empty.progress_percent == 0.0
