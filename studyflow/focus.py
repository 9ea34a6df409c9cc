"""
Today's focus: where the current time falls among today's sessions.
"""

from typing import List

from .models import FocusSummary, StudySession
from .time_utils import time_to_minutes


def build_focus_summary(sessions: List[StudySession], current_time: str) -> FocusSummary:
    """Summarize a day's sessions relative to current_time ("HH:MM").

    A session is in progress when start <= now < end, and completed once
    end <= now.
    """
    now = time_to_minutes(current_time)
    ordered = sorted(sessions, key=lambda s: time_to_minutes(s.start_time))

    current_session = next(
        (s for s in ordered
         if time_to_minutes(s.start_time) <= now < time_to_minutes(s.end_time)),
        None
    )
    next_session = next(
        (s for s in ordered if time_to_minutes(s.start_time) > now),
        None
    )
    completed = sum(1 for s in ordered if time_to_minutes(s.end_time) <= now)

    return FocusSummary(
        current_session=current_session,
        next_session=next_session,
        minutes_until_next=(
            time_to_minutes(next_session.start_time) - now if next_session else None
        ),
        completed_count=completed,
        total_count=len(ordered),
    )


def todays_focus(store) -> FocusSummary:
    """Focus summary for the store's current day at the clock's current time."""
    return build_focus_summary(store.todays_sessions, store.clock.current_time())
