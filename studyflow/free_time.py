"""
Free-time detection.

Finds the largest unscheduled gaps inside the 08:00-21:00 daily window
across the whole week, for the "suggest free time" feature.
"""

from typing import List

from .models import FreeTimeSlot, DAYS_OF_WEEK, DAY_FULL_LABELS
from .time_utils import time_to_minutes, format_time_display, format_duration

DAY_START = "08:00"
DAY_END = "21:00"
MIN_FREE_SLOT_MINUTES = 60  # Only suggest slots of an hour or more
MAX_SUGGESTIONS = 5


class FreeTimeDetector:
    """Derives free-time suggestions from a SessionStore."""

    def __init__(self, store, day_start: str = DAY_START, day_end: str = DAY_END,
                 min_slot_minutes: int = MIN_FREE_SLOT_MINUTES,
                 max_suggestions: int = MAX_SUGGESTIONS):
        self.store = store
        self.day_start = day_start
        self.day_end = day_end
        self.min_slot_minutes = min_slot_minutes
        self.max_suggestions = max_suggestions

    def slots_for_day(self, day: str) -> List[FreeTimeSlot]:
        """Qualifying gaps for one day, in time order.

        Gaps are measured before the first session, between sessions and
        after the last one. Only gaps of at least min_slot_minutes are kept.
        """
        day_start = time_to_minutes(self.day_start)
        day_end = time_to_minutes(self.day_end)
        sessions = self.store.get_by_day(day)

        if not sessions:
            return [FreeTimeSlot(
                day=day,
                start_time=self.day_start,
                end_time=self.day_end,
                duration=day_end - day_start,
            )]

        # (start label, start minutes, end label, end minutes) candidates
        candidates = [(self.day_start, day_start,
                       sessions[0].start_time, time_to_minutes(sessions[0].start_time))]
        for current, following in zip(sessions, sessions[1:]):
            candidates.append((current.end_time, time_to_minutes(current.end_time),
                               following.start_time, time_to_minutes(following.start_time)))
        candidates.append((sessions[-1].end_time, time_to_minutes(sessions[-1].end_time),
                           self.day_end, day_end))

        slots = []
        for start_label, start, end_label, end in candidates:
            gap = end - start
            if gap >= self.min_slot_minutes:
                slots.append(FreeTimeSlot(
                    day=day,
                    start_time=start_label,
                    end_time=end_label,
                    duration=gap,
                ))
        return slots

    def detect(self) -> List[FreeTimeSlot]:
        """Largest free slots across the week, longest first.

        This is a global top-N, not per day. Equal durations keep Monday-first
        order.
        """
        slots = []
        for day in DAYS_OF_WEEK:
            slots.extend(self.slots_for_day(day))
        slots.sort(key=lambda slot: slot.duration, reverse=True)
        return slots[:self.max_suggestions]


def format_free_slot(slot: FreeTimeSlot) -> str:
    """Render a slot, e.g. "Monday: 8:00 AM – 9:00 AM (1h)"."""
    return (
        f"{DAY_FULL_LABELS[slot.day]}: {format_time_display(slot.start_time)} – "
        f"{format_time_display(slot.end_time)} ({format_duration(slot.duration)})"
    )
