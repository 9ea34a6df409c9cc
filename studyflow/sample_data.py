"""
Sample schedule used to demonstrate the planner on an empty store.
"""

from typing import Dict, List

from loguru import logger

from .models import StudySession
from .session_store import EDITABLE_FIELDS

HOUR_MS = 3600000

SAMPLE_SESSIONS: List[Dict] = [
    # Monday
    {"course_name": "Linear Algebra", "day": "monday", "start_time": "09:00", "end_time": "10:30",
     "session_type": "lecture", "intensity": "medium",
     "notes": "Chapter 5: Eigenvalues and Eigenvectors"},
    {"course_name": "Data Structures", "day": "monday", "start_time": "14:00", "end_time": "15:30",
     "session_type": "lecture", "intensity": "heavy",
     "notes": "Binary trees and graph algorithms"},

    # Tuesday
    {"course_name": "Physics 201", "day": "tuesday", "start_time": "08:00", "end_time": "09:30",
     "session_type": "lecture", "intensity": "medium"},
    {"course_name": "Linear Algebra", "day": "tuesday", "start_time": "11:00", "end_time": "12:30",
     "session_type": "personal", "intensity": "light",
     "notes": "Practice problems from homework set 4"},

    # Wednesday
    {"course_name": "Data Structures", "day": "wednesday", "start_time": "10:00", "end_time": "12:00",
     "session_type": "revision", "intensity": "heavy",
     "notes": "Prepare for upcoming quiz"},
    {"course_name": "Technical Writing", "day": "wednesday", "start_time": "14:00", "end_time": "15:00",
     "session_type": "lecture", "intensity": "light"},

    # Thursday
    {"course_name": "Linear Algebra", "day": "thursday", "start_time": "09:00", "end_time": "10:30",
     "session_type": "lecture", "intensity": "medium"},
    {"course_name": "Physics 201", "day": "thursday", "start_time": "13:00", "end_time": "14:30",
     "session_type": "personal", "intensity": "medium",
     "notes": "Lab report preparation"},
    {"course_name": "Data Structures", "day": "thursday", "start_time": "16:00", "end_time": "17:30",
     "session_type": "personal", "intensity": "heavy",
     "notes": "Implement binary search tree project"},

    # Friday
    {"course_name": "Physics 201", "day": "friday", "start_time": "10:00", "end_time": "11:30",
     "session_type": "lecture", "intensity": "medium"},
    {"course_name": "Technical Writing", "day": "friday", "start_time": "14:00", "end_time": "15:30",
     "session_type": "revision", "intensity": "light",
     "notes": "Review essay draft"},

    # Saturday - light study day
    {"course_name": "Linear Algebra", "day": "saturday", "start_time": "10:00", "end_time": "11:30",
     "session_type": "revision", "intensity": "light",
     "notes": "Weekly review of concepts"},

    # Sunday - rest or light catch-up
    {"course_name": "Data Structures", "day": "sunday", "start_time": "15:00", "end_time": "16:30",
     "session_type": "personal", "intensity": "light",
     "notes": "Read ahead for next week"},
]


def generate_sample_sessions(clock) -> List[StudySession]:
    """Build the sample sessions with synthetic, sequential timestamps.

    Earlier entries get earlier created_at values, one hour apart.
    """
    now = clock.timestamp_ms()
    count = len(SAMPLE_SESSIONS)
    return [
        StudySession(
            id=f"sample-{index}-{now}",
            notes=data.get("notes"),
            created_at=now - (count - index) * HOUR_MS,
            updated_at=now - (count - index) * HOUR_MS,
            **{k: v for k, v in data.items() if k != "notes"},
        )
        for index, data in enumerate(SAMPLE_SESSIONS)
    ]


def load_sample_sessions(store) -> int:
    """Add the sample schedule through the store and mark samples as loaded.

    Samples that conflict with sessions already in the store are skipped.

    Returns:
        Number of sessions actually added
    """
    added = 0
    for session in generate_sample_sessions(store.clock):
        result = store.create({k: getattr(session, k) for k in EDITABLE_FIELDS})
        if result.success:
            added += 1

    store.mark_samples_loaded()
    logger.info("Loaded sample schedule", added=added)
    return added
