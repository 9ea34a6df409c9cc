"""
Data models for the weekly study-session planner.

This module defines all the data structures used throughout the application.
All models use Python dataclasses, which keeps the classes that mainly store
data short and readable.

These models represent:
- Study sessions placed on the seven-day grid
- Derived day and week statistics
- Time conflicts reported by a rejected write
- Free-time slots suggested to the user
- Results of store write operations
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict


# Days array for iteration (Monday first)
DAYS_OF_WEEK = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DAY_LABELS = {
    "monday": "Mon",
    "tuesday": "Tue",
    "wednesday": "Wed",
    "thursday": "Thu",
    "friday": "Fri",
    "saturday": "Sat",
    "sunday": "Sun",
}

DAY_FULL_LABELS = {day: day.capitalize() for day in DAYS_OF_WEEK}

SESSION_TYPE_LABELS = {
    "lecture": "Lecture",
    "personal": "Personal Study",
    "revision": "Revision",
}

INTENSITY_LABELS = {
    "light": "Light",
    "medium": "Medium",
    "heavy": "Heavy",
}


@dataclass
class StudySession:
    """Represents one time-boxed study session on the weekly grid.

    The week is a recurring template, so a session only knows its weekday,
    never a calendar date. The store assigns id and timestamps; callers
    never set them.
    """
    id: str                     # Opaque unique identifier, immutable after creation
    course_name: str            # Free text, e.g. "Linear Algebra"
    day: str                    # One of DAYS_OF_WEEK
    start_time: str             # "HH:MM", 24-hour clock
    end_time: str               # "HH:MM", must be after start_time
    session_type: str           # "lecture", "personal" or "revision"
    intensity: str              # "light", "medium" or "heavy"
    notes: Optional[str] = None
    created_at: int = 0         # Logical clock value (ms since epoch)
    updated_at: int = 0


@dataclass
class DayStats:
    """Workload for one day, recomputed on demand."""
    total_minutes: int
    session_count: int
    status: str                 # free / light / balanced / heavy / overloaded


@dataclass
class WeekStats:
    """Workload for the whole week, derived from the seven DayStats."""
    total_minutes: int
    total_sessions: int
    average_per_day: float      # Always total_minutes / 7
    busiest_day: Optional[str]
    lightest_day: Optional[str]
    status: str                 # light / balanced / heavy / overloaded


@dataclass
class TimeConflict:
    """An overlap between an existing session and a candidate write.

    Never persisted; only returned from a rejected create or update.
    """
    existing: StudySession
    candidate: StudySession
    overlap_minutes: int


@dataclass
class FreeTimeSlot:
    """An unscheduled gap inside the daily planning window."""
    day: str
    start_time: str
    end_time: str
    duration: int               # Minutes


@dataclass
class WriteResult:
    """Outcome of a create or update on the session store.

    A failed write is a normal result, not an exception. Exactly one of
    conflicts, error or not_found explains a failure.
    """
    success: bool
    session: Optional[StudySession] = None
    conflicts: List[TimeConflict] = field(default_factory=list)
    error: Optional[str] = None
    not_found: bool = False


@dataclass
class FocusSummary:
    """What is happening today relative to the current time."""
    current_session: Optional[StudySession]
    next_session: Optional[StudySession]
    minutes_until_next: Optional[int]
    completed_count: int
    total_count: int

    @property
    def progress_percent(self) -> float:
        """Share of today's sessions already finished."""
        if self.total_count == 0:
            return 0.0
        return self.completed_count / self.total_count * 100


# Serialization helpers for JSON conversion

def serialize_session(session: StudySession) -> Dict:
    """Convert a StudySession to a JSON-serializable dict."""
    return asdict(session)


def deserialize_session(data: Dict) -> StudySession:
    """Convert a stored dict back to a StudySession.

    Raises:
        KeyError: If a required field is missing
        TypeError: If data is not a mapping
    """
    return StudySession(
        id=str(data["id"]),
        course_name=data["course_name"],
        day=data["day"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        session_type=data["session_type"],
        intensity=data["intensity"],
        notes=data.get("notes"),
        created_at=int(data.get("created_at", 0)),
        updated_at=int(data.get("updated_at", 0)),
    )


def serialize_conflict(conflict: TimeConflict) -> Dict:
    """Convert a TimeConflict to a JSON-serializable dict."""
    return {
        "existing": serialize_session(conflict.existing),
        "candidate": serialize_session(conflict.candidate),
        "overlap_minutes": conflict.overlap_minutes,
    }
