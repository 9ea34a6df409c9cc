"""
Conflict detection for study sessions.

Sessions occupy half-open intervals [start, end), so a session that ends at
10:30 does not conflict with one starting at 10:30.
"""

from typing import Iterable, List, Optional

from .models import StudySession, TimeConflict
from .time_utils import time_to_minutes


def overlap_minutes(start1: int, end1: int, start2: int, end2: int) -> int:
    """Length of the intersection of two minute intervals, or 0."""
    overlap_start = max(start1, start2)
    overlap_end = min(end1, end2)
    return max(0, overlap_end - overlap_start)


def find_conflicts(candidate: StudySession,
                   existing_sessions: Iterable[StudySession],
                   exclude_id: Optional[str] = None) -> List[TimeConflict]:
    """Find every existing session that overlaps the candidate.

    Only sessions on the candidate's day are compared, so callers may pass
    either a day-filtered list or the whole collection.

    Args:
        candidate: Session about to be written
        existing_sessions: Sessions already in the store
        exclude_id: Id to skip, used when a session is checked against its own slot

    Returns:
        One TimeConflict per overlapping session, in the order given
    """
    conflicts = []
    new_start = time_to_minutes(candidate.start_time)
    new_end = time_to_minutes(candidate.end_time)

    for existing in existing_sessions:
        if existing.day != candidate.day:
            continue
        if exclude_id is not None and existing.id == exclude_id:
            continue

        overlap = overlap_minutes(
            new_start, new_end,
            time_to_minutes(existing.start_time),
            time_to_minutes(existing.end_time),
        )
        if overlap > 0:
            conflicts.append(TimeConflict(
                existing=existing,
                candidate=candidate,
                overlap_minutes=overlap,
            ))

    return conflicts
