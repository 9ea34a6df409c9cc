"""
Session store: the single owner of the study-session collection.

Every write goes through create, update, delete or clear_all. Writes are
checked for time conflicts against same-day sessions before anything is
changed; a rejected write leaves the collection untouched. Every successful
write persists the whole collection before returning.
"""

import uuid
from dataclasses import replace
from typing import Dict, List, Optional

from loguru import logger

from . import config
from .conflicts import find_conflicts
from .models import (
    StudySession, TimeConflict, WriteResult,
    DAYS_OF_WEEK, SESSION_TYPE_LABELS, INTENSITY_LABELS,
    serialize_session, deserialize_session,
)
from .time_utils import SystemClock, is_valid_time, minutes_to_time, time_to_minutes

# Fields a caller may set on create/update
EDITABLE_FIELDS = (
    "course_name", "day", "start_time", "end_time",
    "session_type", "intensity", "notes",
)

PROTECTED_FIELDS = ("id", "created_at", "updated_at")


def validate_session_fields(data: Dict) -> Optional[str]:
    """Check a full set of session fields.

    Returns:
        A user-facing error message, or None if the fields are valid
    """
    course_name = data.get("course_name")
    if not isinstance(course_name, str) or not course_name.strip():
        return "Course name is required"
    if data.get("day") not in DAYS_OF_WEEK:
        return f"Unknown day: {data.get('day')!r}"
    if data.get("session_type") not in tuple(SESSION_TYPE_LABELS):
        return f"Unknown session type: {data.get('session_type')!r}"
    if data.get("intensity") not in tuple(INTENSITY_LABELS):
        return f"Unknown intensity: {data.get('intensity')!r}"
    notes = data.get("notes")
    if notes is not None and not isinstance(notes, str):
        return "Notes must be text"
    if not is_valid_time(data.get("start_time")) or not is_valid_time(data.get("end_time")):
        return "Times must be in HH:MM format"
    if time_to_minutes(data["start_time"]) >= time_to_minutes(data["end_time"]):
        return "End time must be after start time"
    return None


def _clean_fields(data: Dict) -> Dict:
    """Trim text fields; blank notes become None; valid times become "HH:MM"."""
    cleaned = dict(data)
    for key in ("start_time", "end_time"):
        if is_valid_time(cleaned.get(key)):
            cleaned[key] = minutes_to_time(time_to_minutes(cleaned[key]))
    if isinstance(cleaned.get("course_name"), str):
        cleaned["course_name"] = cleaned["course_name"].strip()
    notes = cleaned.get("notes")
    if isinstance(notes, str):
        cleaned["notes"] = notes.strip() or None
    return cleaned


def _sort_key(session: StudySession) -> int:
    return time_to_minutes(session.start_time)


class SessionStore:
    """Owns the canonical list of study sessions.

    The collection is read from storage once, in the constructor. Reads are
    served from memory; statistics and free-time views recompute from it on
    every access.
    """

    def __init__(self, storage, clock=None):
        """Initialize the store and load persisted sessions.

        Args:
            storage: Key-value storage with get/set (see storage.py)
            clock: Clock providing now(); defaults to the system clock
        """
        self.storage = storage
        self.clock = clock or SystemClock(config.TIMEZONE)
        self._sessions = self._load()

    def _load(self) -> List[StudySession]:
        """Read the full collection. Unreadable data counts as empty."""
        raw = self.storage.get(config.SESSIONS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Stored sessions are not a list; starting empty")
            return []
        try:
            sessions = [deserialize_session(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Stored sessions could not be read ({e}); starting empty")
            return []
        for session in sessions:
            error = validate_session_fields(serialize_session(session))
            if error:
                logger.warning(
                    "Stored session is invalid; starting empty",
                    session_id=session.id,
                    reason=error,
                )
                return []
        logger.debug("Loaded sessions", count=len(sessions))
        return sessions

    def _persist(self):
        self.storage.set(
            config.SESSIONS_KEY,
            [serialize_session(s) for s in self._sessions]
        )

    def _new_id(self) -> str:
        existing = {s.id for s in self._sessions}
        while True:
            session_id = uuid.uuid4().hex
            if session_id not in existing:
                return session_id

    # Read paths

    @property
    def sessions(self) -> List[StudySession]:
        """All sessions in insertion order (a copy of the list)."""
        return list(self._sessions)

    @property
    def is_empty(self) -> bool:
        return not self._sessions

    def get(self, session_id: str) -> Optional[StudySession]:
        """Look up a session by id."""
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    def get_by_day(self, day: str) -> List[StudySession]:
        """Sessions for one day, ascending by start time.

        Sessions sharing a start time keep their insertion order.
        """
        return sorted(
            (s for s in self._sessions if s.day == day),
            key=_sort_key
        )

    def get_by_course(self, course_name: str) -> List[StudySession]:
        """Sessions for one course, ordered Monday to Sunday then by start time."""
        return [
            s
            for day in DAYS_OF_WEEK
            for s in self.get_by_day(day)
            if s.course_name == course_name
        ]

    @property
    def course_names(self) -> List[str]:
        """Distinct course names, alphabetically sorted."""
        return sorted({s.course_name for s in self._sessions})

    @property
    def current_day(self) -> str:
        return self.clock.current_day()

    @property
    def todays_sessions(self) -> List[StudySession]:
        return self.get_by_day(self.current_day)

    def find_conflicts(self, candidate: StudySession,
                       exclude_id: Optional[str] = None) -> List[TimeConflict]:
        """Check a candidate against same-day sessions without writing."""
        return find_conflicts(
            candidate,
            [s for s in self._sessions if s.day == candidate.day],
            exclude_id=exclude_id,
        )

    def check_conflicts(self, data: Dict, exclude_id: Optional[str] = None) -> List[TimeConflict]:
        """Pre-check raw form fields for conflicts before a write attempt.

        The candidate carries exclude_id (or "new") as its id.
        """
        candidate = StudySession(
            id=exclude_id or "new",
            **{k: data.get(k) for k in EDITABLE_FIELDS}
        )
        return self.find_conflicts(candidate, exclude_id=exclude_id)

    # Write paths

    def create(self, data: Dict) -> WriteResult:
        """Add a new session if it is valid and conflict-free.

        Args:
            data: Session fields (see EDITABLE_FIELDS); notes is optional

        Returns:
            WriteResult with the created session, or the reason it was rejected
        """
        unknown = set(data) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown session fields: {sorted(unknown)}")

        fields = _clean_fields({k: data.get(k) for k in EDITABLE_FIELDS})
        error = validate_session_fields(fields)
        if error:
            logger.info("Rejected new session", reason=error)
            return WriteResult(success=False, error=error)

        candidate = StudySession(id="new", **fields)
        conflicts = self.find_conflicts(candidate)
        if conflicts:
            logger.info(
                "Rejected new session due to conflicts",
                day=candidate.day,
                conflicts=len(conflicts),
            )
            return WriteResult(success=False, conflicts=conflicts)

        now = self.clock.timestamp_ms()
        session = replace(candidate, id=self._new_id(), created_at=now, updated_at=now)
        self._sessions.append(session)
        self._persist()

        logger.info(
            "Created session",
            session_id=session.id,
            course=session.course_name,
            day=session.day,
        )
        return WriteResult(success=True, session=session)

    def update(self, session_id: str, changes: Dict) -> WriteResult:
        """Merge changes onto an existing session.

        The session is checked against its day excluding itself, so it may
        keep its own slot.

        Raises:
            ValueError: If changes name a field that does not exist or cannot be edited
        """
        blocked = set(changes) & set(PROTECTED_FIELDS)
        if blocked:
            raise ValueError(f"Fields cannot be updated: {sorted(blocked)}")
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown session fields: {sorted(unknown)}")

        existing = self.get(session_id)
        if existing is None:
            logger.info("Update of unknown session", session_id=session_id)
            return WriteResult(success=False, not_found=True, error="Session not found")

        merged = {k: getattr(existing, k) for k in EDITABLE_FIELDS}
        merged.update(changes)
        merged = _clean_fields(merged)

        error = validate_session_fields(merged)
        if error:
            logger.info("Rejected session update", session_id=session_id, reason=error)
            return WriteResult(success=False, error=error)

        candidate = replace(existing, **merged)
        conflicts = self.find_conflicts(candidate, exclude_id=session_id)
        if conflicts:
            logger.info(
                "Rejected session update due to conflicts",
                session_id=session_id,
                conflicts=len(conflicts),
            )
            return WriteResult(success=False, conflicts=conflicts)

        updated = replace(
            candidate,
            updated_at=max(self.clock.timestamp_ms(), existing.updated_at)
        )
        self._sessions = [updated if s.id == session_id else s for s in self._sessions]
        self._persist()

        logger.info("Updated session", session_id=session_id)
        return WriteResult(success=True, session=updated)

    def delete(self, session_id: str) -> bool:
        """Remove a session.

        Returns:
            True if a session was removed, False if the id was unknown
        """
        if self.get(session_id) is None:
            return False

        self._sessions = [s for s in self._sessions if s.id != session_id]
        self._persist()
        logger.info("Deleted session", session_id=session_id)
        return True

    def clear_all(self):
        """Remove every session and reset the sample-data flag. Irreversible."""
        count = len(self._sessions)
        self._sessions = []
        self._persist()
        self.storage.set(config.SAMPLES_LOADED_KEY, False)
        logger.info("Cleared all sessions", removed=count)

    @property
    def samples_loaded(self) -> bool:
        return bool(self.storage.get(config.SAMPLES_LOADED_KEY, False))

    def mark_samples_loaded(self):
        self.storage.set(config.SAMPLES_LOADED_KEY, True)
