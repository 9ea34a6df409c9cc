"""
Flask web application for the weekly study planner.

A JSON API for the presentation layer. It provides:
- Session create, edit and delete with conflict reporting
- Per-day timetable views
- Weekly and daily workload statistics
- Free-time suggestions and today's focus
- Sample schedule loading
- Calendar file download
"""

import io
from dataclasses import asdict
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request, send_file
from loguru import logger

from . import config
from .focus import todays_focus
from .free_time import FreeTimeDetector, format_free_slot
from .icalendar_gen import ICalendarGenerator
from .logger import setup_logger
from .models import (
    WriteResult, DAYS_OF_WEEK,
    serialize_session, serialize_conflict,
)
from .sample_data import load_sample_sessions
from .session_store import SessionStore, EDITABLE_FIELDS
from .statistics import StatisticsEngine, WEEK_STATUS_MESSAGES, weekly_target_percentage
from .storage import get_storage
from .time_utils import SystemClock


def write_result_response(result: WriteResult, success_status: int = 200):
    """Turn a store WriteResult into a JSON response.

    Conflicts are 409, validation errors 400, unknown ids 404.
    """
    if result.success:
        return jsonify({"success": True, "session": serialize_session(result.session)}), success_status
    if result.not_found:
        return jsonify({"success": False, "error": result.error}), 404
    if result.conflicts:
        return jsonify({
            "success": False,
            "error": "Session overlaps existing sessions",
            "conflicts": [serialize_conflict(c) for c in result.conflicts],
        }), 409
    return jsonify({"success": False, "error": result.error}), 400


def create_app(store: Optional[SessionStore] = None) -> Flask:
    """Build the Flask app around a session store.

    Args:
        store: Store to serve. Defaults to one backed by get_storage()
    """
    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY

    if store is None:
        store = SessionStore(get_storage(), clock=SystemClock(config.TIMEZONE))
    app.config['SESSION_STORE'] = store

    def read_fields():
        """Session fields from the JSON body, or None if the body is unusable."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return None
        return {k: v for k, v in payload.items() if k in EDITABLE_FIELDS}

    @app.route('/api/sessions', methods=['GET'])
    def list_sessions():
        """All sessions, optionally filtered by ?course=."""
        course = request.args.get('course')
        sessions = store.get_by_course(course) if course else store.sessions
        return jsonify([serialize_session(s) for s in sessions])

    @app.route('/api/sessions', methods=['POST'])
    def add_session():
        fields = read_fields()
        if fields is None:
            return jsonify({"success": False, "error": "Expected a JSON object"}), 400
        return write_result_response(store.create(fields), success_status=201)

    @app.route('/api/sessions', methods=['DELETE'])
    def clear_sessions():
        store.clear_all()
        return jsonify({"success": True})

    @app.route('/api/sessions/<session_id>', methods=['GET'])
    def get_session(session_id):
        session = store.get(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        return jsonify(serialize_session(session))

    @app.route('/api/sessions/<session_id>', methods=['PATCH'])
    def update_session(session_id):
        fields = read_fields()
        if fields is None:
            return jsonify({"success": False, "error": "Expected a JSON object"}), 400
        return write_result_response(store.update(session_id, fields))

    @app.route('/api/sessions/<session_id>', methods=['DELETE'])
    def delete_session(session_id):
        # Deleting an unknown id is a no-op, not an error
        return jsonify({"deleted": store.delete(session_id)})

    @app.route('/api/conflicts', methods=['POST'])
    def check_conflicts():
        """Pre-check form fields for overlaps without saving."""
        fields = read_fields()
        if fields is None:
            return jsonify({"error": "Expected a JSON object"}), 400
        exclude_id = request.args.get('exclude_id')
        try:
            conflicts = store.check_conflicts(fields, exclude_id=exclude_id)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify([serialize_conflict(c) for c in conflicts])

    @app.route('/api/days/<day>', methods=['GET'])
    def day_view(day):
        if day not in DAYS_OF_WEEK:
            return jsonify({"error": f"Unknown day: {day}"}), 404
        engine = StatisticsEngine(store)
        return jsonify({
            "day": day,
            "sessions": [serialize_session(s) for s in store.get_by_day(day)],
            "stats": asdict(engine.get_day_stats(day)),
        })

    @app.route('/api/stats', methods=['GET'])
    def stats():
        engine = StatisticsEngine(store)
        week = engine.week_stats()
        return jsonify({
            "week": asdict(week),
            "message": WEEK_STATUS_MESSAGES[week.status],
            "target_percentage": weekly_target_percentage(week),
            "days": {
                day: asdict(day_stats)
                for day, day_stats in zip(DAYS_OF_WEEK, engine.all_day_stats())
            },
            "current_day": store.current_day,
        })

    @app.route('/api/free-time', methods=['GET'])
    def free_time():
        slots = FreeTimeDetector(store).detect()
        return jsonify([
            dict(asdict(slot), label=format_free_slot(slot)) for slot in slots
        ])

    @app.route('/api/today', methods=['GET'])
    def today():
        summary = todays_focus(store)
        return jsonify({
            "day": store.current_day,
            "sessions": [serialize_session(s) for s in store.todays_sessions],
            "current_session": serialize_session(summary.current_session) if summary.current_session else None,
            "next_session": serialize_session(summary.next_session) if summary.next_session else None,
            "minutes_until_next": summary.minutes_until_next,
            "completed_count": summary.completed_count,
            "total_count": summary.total_count,
            "progress_percent": summary.progress_percent,
        })

    @app.route('/api/courses', methods=['GET'])
    def courses():
        return jsonify(store.course_names)

    @app.route('/api/samples', methods=['POST'])
    def samples():
        added = load_sample_sessions(store)
        return jsonify({"added": added, "samples_loaded": store.samples_loaded})

    @app.route('/api/export.ics', methods=['GET'])
    def export_calendar():
        """Download one week of sessions as an .ics file (?week=YYYY-MM-DD)."""
        week_arg = request.args.get('week')
        try:
            week_start = date.fromisoformat(week_arg) if week_arg else store.clock.now().date()
        except ValueError:
            return jsonify({"error": "week must be YYYY-MM-DD"}), 400

        generator = ICalendarGenerator(timezone_str=config.TIMEZONE)
        calendar = generator.generate_week_calendar(store.sessions, week_start)
        return send_file(
            io.BytesIO(calendar.to_ical()),
            as_attachment=True,
            download_name="studyflow.ics",
            mimetype='text/calendar'
        )

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Unhandled error: {error}")
        return jsonify({"error": "Internal server error"}), 500

    return app


if __name__ == '__main__':
    # Run development server
    setup_logger(level=config.LOG_LEVEL, log_file=config.LOG_FILE)
    create_app().run(debug=True, host='0.0.0.0', port=5000)
