"""
Main CLI entry point for the weekly study planner.
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from . import config
from .free_time import FreeTimeDetector, format_free_slot
from .focus import todays_focus
from .icalendar_gen import ICalendarGenerator
from .logger import setup_logger
from .models import (
    StudySession, WriteResult,
    DAYS_OF_WEEK, DAY_FULL_LABELS, SESSION_TYPE_LABELS, INTENSITY_LABELS,
)
from .sample_data import load_sample_sessions
from .session_store import SessionStore
from .statistics import (
    StatisticsEngine, WEEK_STATUS_MESSAGES, DAY_STATUS_LABELS, weekly_target_percentage
)
from .storage import get_storage
from .time_utils import (
    SystemClock, format_time_display, format_duration, get_session_duration,
    parse_time_input,
)

DAY_ALIASES = {
    'm': 'monday', 'mon': 'monday',
    't': 'tuesday', 'tue': 'tuesday', 'tues': 'tuesday',
    'w': 'wednesday', 'wed': 'wednesday',
    'th': 'thursday', 'thu': 'thursday', 'thur': 'thursday', 'thurs': 'thursday',
    'f': 'friday', 'fri': 'friday',
    's': 'saturday', 'sat': 'saturday',
    'su': 'sunday', 'sun': 'sunday',
}


def parse_day(text: str) -> str:
    """Normalize a day name or abbreviation ("Mon", "th", "Friday").

    Raises:
        argparse.ArgumentTypeError: If the text is not a weekday
    """
    key = text.strip().lower()
    if key in DAYS_OF_WEEK:
        return key
    if key in DAY_ALIASES:
        return DAY_ALIASES[key]
    raise argparse.ArgumentTypeError(f"not a day of the week: {text!r}")


def parse_time_arg(text: str) -> str:
    """argparse type wrapper around parse_time_input."""
    try:
        return parse_time_input(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def format_session_line(session: StudySession) -> str:
    duration = get_session_duration(session.start_time, session.end_time)
    line = (
        f"{format_time_display(session.start_time):>8} – {format_time_display(session.end_time):<8} "
        f"{session.course_name} [{SESSION_TYPE_LABELS[session.session_type]}, "
        f"{INTENSITY_LABELS[session.intensity]}] ({format_duration(duration)})  id={session.id}"
    )
    if session.notes:
        line += f"\n{'':19}{session.notes}"
    return line


def report_write_failure(result: WriteResult):
    """Print why a create/update was rejected."""
    if result.not_found:
        print("Error: session not found")
    elif result.conflicts:
        print(f"Cannot save: overlaps with {len(result.conflicts)} session(s):")
        for conflict in result.conflicts:
            existing = conflict.existing
            print(f"  - \"{existing.course_name}\" "
                  f"({format_time_display(existing.start_time)} – "
                  f"{format_time_display(existing.end_time)}), "
                  f"{format_duration(conflict.overlap_minutes)} overlap")
    else:
        print(f"Error: {result.error}")


def cmd_list(store: SessionStore, args) -> int:
    days = [args.day] if args.day else DAYS_OF_WEEK
    if store.is_empty:
        print("No study sessions yet. Add one with 'studyflow add' or load samples with 'studyflow samples'.")
        return 0
    for day in days:
        sessions = store.get_by_day(day)
        print(f"\n{DAY_FULL_LABELS[day]}")
        if not sessions:
            print("  (free)")
        for session in sessions:
            print(f"  {format_session_line(session)}")
    return 0


def cmd_add(store: SessionStore, args) -> int:
    result = store.create({
        "course_name": args.course,
        "day": args.day,
        "start_time": args.start,
        "end_time": args.end,
        "session_type": args.type,
        "intensity": args.intensity,
        "notes": args.notes,
    })
    if not result.success:
        report_write_failure(result)
        return 1
    print(f"Session added: {result.session.course_name} on "
          f"{DAY_FULL_LABELS[result.session.day]} (id={result.session.id})")
    return 0


def cmd_edit(store: SessionStore, args) -> int:
    changes = {
        field: value
        for field, value in (
            ("course_name", args.course),
            ("day", args.day),
            ("start_time", args.start),
            ("end_time", args.end),
            ("session_type", args.type),
            ("intensity", args.intensity),
            ("notes", args.notes),
        )
        if value is not None
    }
    if not changes:
        print("Nothing to change.")
        return 0
    result = store.update(args.session_id, changes)
    if not result.success:
        report_write_failure(result)
        return 1
    print(f"Session updated: {result.session.course_name}")
    return 0


def cmd_delete(store: SessionStore, args) -> int:
    if store.delete(args.session_id):
        print("Session deleted.")
    else:
        print("No session with that id; nothing deleted.")
    return 0


def cmd_clear(store: SessionStore, args) -> int:
    if not args.yes:
        response = input("Delete ALL sessions? This cannot be undone. (y/n): ").strip().lower()
        if response != 'y':
            print("Cancelled.")
            return 1
    store.clear_all()
    print("All sessions cleared.")
    return 0


def cmd_stats(store: SessionStore, args) -> int:
    engine = StatisticsEngine(store)
    week = engine.week_stats()

    print("Weekly Overview")
    print(f"  Total: {format_duration(week.total_minutes)} across {week.total_sessions} "
          f"session{'s' if week.total_sessions != 1 else ''}")
    print(f"  Average per day: {format_duration(round(week.average_per_day))}")
    print(f"  {WEEK_STATUS_MESSAGES[week.status]} "
          f"({weekly_target_percentage(week):.0f}% of a 25h week)")
    if week.busiest_day:
        print(f"  Busiest day: {DAY_FULL_LABELS[week.busiest_day]}")
    if week.lightest_day:
        print(f"  Lightest day: {DAY_FULL_LABELS[week.lightest_day]}")

    print("\nDaily Breakdown")
    current_day = store.current_day
    for day, stats in zip(DAYS_OF_WEEK, engine.all_day_stats()):
        marker = "*" if day == current_day else " "
        print(f" {marker}{DAY_FULL_LABELS[day]:<10} {format_duration(stats.total_minutes):>7}  "
              f"{stats.session_count} session(s)  {DAY_STATUS_LABELS[stats.status]}")
    return 0


def cmd_free(store: SessionStore, args) -> int:
    slots = FreeTimeDetector(store).detect()
    if not slots:
        print("No free slots of an hour or more this week.")
        return 0
    print("Suggested free time:")
    for slot in slots:
        print(f"  {format_free_slot(slot)}")
    return 0


def cmd_today(store: SessionStore, args) -> int:
    summary = todays_focus(store)
    print(f"Today ({DAY_FULL_LABELS[store.current_day]})")
    if summary.total_count == 0:
        print("  No sessions today. Enjoy the break!")
        return 0
    if summary.current_session:
        print(f"  In progress: {summary.current_session.course_name} "
              f"until {format_time_display(summary.current_session.end_time)}")
    elif summary.next_session:
        print(f"  Up next: {summary.next_session.course_name} at "
              f"{format_time_display(summary.next_session.start_time)} "
              f"(in {format_duration(summary.minutes_until_next)})")
    else:
        print("  All done! You've completed all sessions for today.")
    print(f"  Progress: {summary.completed_count}/{summary.total_count}")
    return 0


def cmd_courses(store: SessionStore, args) -> int:
    if args.course:
        sessions = store.get_by_course(args.course)
        if not sessions:
            print(f"No sessions for {args.course!r}.")
            return 1
        for session in sessions:
            print(f"  {DAY_FULL_LABELS[session.day]:<10} {format_session_line(session)}")
        return 0
    for name in store.course_names:
        print(name)
    return 0


def cmd_samples(store: SessionStore, args) -> int:
    if store.samples_loaded and not args.force:
        print("Sample schedule already loaded (use --force to load again).")
        return 0
    added = load_sample_sessions(store)
    print(f"Sample schedule loaded: added {added} study sessions.")
    return 0


def cmd_export(store: SessionStore, args) -> int:
    week_start = args.week or store.clock.now().date()
    generator = ICalendarGenerator(timezone_str=config.TIMEZONE)
    calendar = generator.generate_week_calendar(store.sessions, week_start)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    generator.export_to_file(calendar, str(output))
    print(f"Saved calendar to: {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="studyflow",
        description="Plan weekly study sessions, spot conflicts and check your workload"
    )
    parser.add_argument("--db", type=str, default=None,
                        help="SQLite database file (default: STUDYFLOW_DB_PATH or ~/.studyflow/studyflow.db)")
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL,
                        help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="Show the timetable")
    p.add_argument("--day", type=parse_day, help="Only show one day")
    p.set_defaults(func=cmd_list)

    def add_session_fields(p, required: bool):
        p.add_argument("--course", required=required, help="Course name")
        p.add_argument("--day", type=parse_day, required=required, help="Day of the week")
        p.add_argument("--start", type=parse_time_arg, required=required, help="Start time, e.g. 09:00 or 9am")
        p.add_argument("--end", type=parse_time_arg, required=required, help="End time, e.g. 10:30 or 10:30am")
        p.add_argument("--type", choices=list(SESSION_TYPE_LABELS),
                       default="personal" if required else None, help="Session type")
        p.add_argument("--intensity", choices=list(INTENSITY_LABELS),
                       default="medium" if required else None, help="Study intensity")
        p.add_argument("--notes", default=None, help="Optional notes")

    p = sub.add_parser("add", help="Add a study session")
    add_session_fields(p, required=True)
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("edit", help="Change an existing session")
    p.add_argument("session_id")
    add_session_fields(p, required=False)
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser("delete", help="Delete a session")
    p.add_argument("session_id")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("clear", help="Delete every session")
    p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    p.set_defaults(func=cmd_clear)

    p = sub.add_parser("stats", help="Weekly and daily workload")
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("free", help="Suggest free time slots")
    p.set_defaults(func=cmd_free)

    p = sub.add_parser("today", help="What's happening today")
    p.set_defaults(func=cmd_today)

    p = sub.add_parser("courses", help="List courses, or one course's sessions")
    p.add_argument("--course", default=None, help="Show sessions for this course")
    p.set_defaults(func=cmd_courses)

    p = sub.add_parser("samples", help="Load the sample schedule")
    p.add_argument("--force", action="store_true", help="Load even if loaded before")
    p.set_defaults(func=cmd_samples)

    p = sub.add_parser("export", help="Export one week as an .ics file")
    p.add_argument("--week", type=date.fromisoformat, default=None, help="Any date in the target week (YYYY-MM-DD, default: this week)")
    p.add_argument("--output", default="studyflow.ics", help="Output .ics path (default: studyflow.ics)")
    p.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None, store: Optional[SessionStore] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv)
        store: Pre-built store, used by tests

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger(level=args.log_level.upper(), log_file=config.LOG_FILE)

    if store is None:
        storage = get_storage(Path(args.db) if args.db else None)
        store = SessionStore(storage, clock=SystemClock(config.TIMEZONE))

    try:
        return args.func(store, args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
