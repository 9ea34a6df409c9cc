"""
Workload statistics.

Derives per-day and per-week load from the store's current contents and
classifies them into status bands. Nothing is cached: every call recomputes
from the session list.
"""

from typing import List

from .models import DayStats, WeekStats, DAYS_OF_WEEK
from .time_utils import get_session_duration

# Day bands: 0 free, 1-119 light, 120-300 balanced, 301-420 heavy, 421+ overloaded
DAY_LIGHT_BELOW = 120
DAY_BALANCED_MAX = 300
DAY_HEAVY_MAX = 420

# Week bands: 0-599 light, 600-1500 balanced, 1501-2100 heavy, 2101+ overloaded
WEEK_LIGHT_BELOW = 600
WEEK_BALANCED_MAX = 1500
WEEK_HEAVY_MAX = 2100

RECOMMENDED_WEEKLY_MINUTES = 25 * 60

WEEK_STATUS_MESSAGES = {
    "light": "Light week – room to add more",
    "balanced": "Balanced workload",
    "heavy": "Heavy week – pace yourself",
    "overloaded": "Overloaded – consider reducing",
}

DAY_STATUS_LABELS = {
    "free": "Free",
    "light": "Light",
    "balanced": "Balanced",
    "heavy": "Heavy",
    "overloaded": "Overloaded",
}


def classify_day(total_minutes: int) -> str:
    """Map a day's scheduled minutes to its status band."""
    if total_minutes == 0:
        return "free"
    elif total_minutes < DAY_LIGHT_BELOW:
        return "light"
    elif total_minutes <= DAY_BALANCED_MAX:
        return "balanced"
    elif total_minutes <= DAY_HEAVY_MAX:
        return "heavy"
    else:
        return "overloaded"


def classify_week(total_minutes: int) -> str:
    """Map a week's scheduled minutes to its status band."""
    if total_minutes < WEEK_LIGHT_BELOW:
        return "light"
    elif total_minutes <= WEEK_BALANCED_MAX:
        return "balanced"
    elif total_minutes <= WEEK_HEAVY_MAX:
        return "heavy"
    else:
        return "overloaded"


def weekly_target_percentage(week_stats: WeekStats) -> float:
    """Share of the recommended 25-hour week already scheduled, capped at 100."""
    return min(week_stats.total_minutes / RECOMMENDED_WEEKLY_MINUTES * 100, 100.0)


class StatisticsEngine:
    """Computes day and week statistics from a SessionStore."""

    def __init__(self, store):
        self.store = store

    def get_day_stats(self, day: str) -> DayStats:
        """Total minutes, session count and status for one day."""
        sessions = self.store.get_by_day(day)
        total_minutes = sum(
            get_session_duration(s.start_time, s.end_time) for s in sessions
        )
        return DayStats(
            total_minutes=total_minutes,
            session_count=len(sessions),
            status=classify_day(total_minutes),
        )

    def all_day_stats(self) -> List[DayStats]:
        """DayStats for Monday through Sunday, in order."""
        return [self.get_day_stats(day) for day in DAYS_OF_WEEK]

    def week_stats(self) -> WeekStats:
        """Aggregate the seven days.

        The busiest day is the first with the strictly greatest total, None if
        the week is empty. The lightest day is the first with the strictly
        smallest total, None unless that total is above zero, so any free day
        means no lightest day is reported.
        """
        total_minutes = 0
        total_sessions = 0
        busiest_day = None
        lightest_day = None
        max_minutes = 0
        min_minutes = None

        for day in DAYS_OF_WEEK:
            stats = self.get_day_stats(day)
            total_minutes += stats.total_minutes
            total_sessions += stats.session_count

            if stats.total_minutes > max_minutes:
                max_minutes = stats.total_minutes
                busiest_day = day

            if min_minutes is None or stats.total_minutes < min_minutes:
                min_minutes = stats.total_minutes
                lightest_day = day

        return WeekStats(
            total_minutes=total_minutes,
            total_sessions=total_sessions,
            average_per_day=total_minutes / 7,
            busiest_day=busiest_day if max_minutes > 0 else None,
            lightest_day=lightest_day if min_minutes else None,
            status=classify_week(total_minutes),
        )
