"""Unit tests for workload statistics."""

import pytest

from studyflow.models import WeekStats
from studyflow.statistics import (
    StatisticsEngine, classify_day, classify_week, weekly_target_percentage,
)
from studyflow.time_utils import minutes_to_time


def add_minutes(store, make_fields, day, minutes, start=8 * 60):
    """Schedule one session of the given length on a day."""
    result = store.create(make_fields(
        day=day, start=minutes_to_time(start), end=minutes_to_time(start + minutes)
    ))
    assert result.success


@pytest.mark.parametrize("minutes, status", [
    (0, "free"),
    (1, "light"),
    (119, "light"),
    (120, "balanced"),
    (300, "balanced"),
    (301, "heavy"),
    (420, "heavy"),
    (421, "overloaded"),
])
def test_classify_day(minutes, status):
    """Test day load bands."""
    assert classify_day(minutes) == status


@pytest.mark.parametrize("minutes, status", [
    (0, "light"),
    (599, "light"),
    (600, "balanced"),
    (1500, "balanced"),
    (1501, "heavy"),
    (2100, "heavy"),
    (2101, "overloaded"),
])
def test_classify_week(minutes, status):
    """Test week load bands."""
    assert classify_week(minutes) == status


@pytest.mark.parametrize("minutes, status", [
    (119, "light"), (120, "balanced"), (300, "balanced"), (301, "heavy"), (421, "overloaded"),
])
def test_day_stats_boundaries(store, make_fields, minutes, status):
    """Test day status at band boundaries."""
    add_minutes(store, make_fields, "wednesday", minutes)
    stats = StatisticsEngine(store).get_day_stats("wednesday")
    assert stats.total_minutes == minutes
    assert stats.session_count == 1
    assert stats.status == status


def test_day_stats_sums_sessions(store, make_fields):
    """Test day totals."""
    add_minutes(store, make_fields, "monday", 60, start=8 * 60)
    add_minutes(store, make_fields, "monday", 45, start=10 * 60)
    stats = StatisticsEngine(store).get_day_stats("monday")
    assert stats.total_minutes == 105
    assert stats.session_count == 2


def test_empty_week(store):
    """Test statistics for an empty week."""
    week = StatisticsEngine(store).week_stats()
    assert week.total_minutes == 0
    assert week.total_sessions == 0
    assert week.average_per_day == 0
    assert week.busiest_day is None
    assert week.lightest_day is None
    assert week.status == "light"


def test_average_divides_by_seven(store, make_fields):
    """Test the daily average."""
    add_minutes(store, make_fields, "thursday", 70)
    week = StatisticsEngine(store).week_stats()
    assert week.total_minutes == 70
    assert week.average_per_day == 70 / 7
    assert week.busiest_day == "thursday"
    # Six free days, so no lightest day
    assert week.lightest_day is None


def test_busiest_and_lightest_first_wins(store, make_fields):
    """Test busiest and lightest day ties."""
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"):
        add_minutes(store, make_fields, day, 60)
    add_minutes(store, make_fields, "tuesday", 60, start=12 * 60)
    add_minutes(store, make_fields, "friday", 60, start=12 * 60)

    week = StatisticsEngine(store).week_stats()
    assert week.busiest_day == "tuesday"
    assert week.lightest_day == "monday"
    assert week.total_sessions == 9
    assert week.total_minutes == 540


def test_week_status_from_total(store, make_fields):
    """Test week status."""
    for day in ("monday", "tuesday", "wednesday"):
        add_minutes(store, make_fields, day, 200)
    assert StatisticsEngine(store).week_stats().status == "balanced"


def test_all_day_stats_order(store, make_fields):
    """Test all_day_stats ordering."""
    add_minutes(store, make_fields, "sunday", 30)
    stats = StatisticsEngine(store).all_day_stats()
    assert len(stats) == 7
    assert stats[-1].total_minutes == 30
    assert all(s.status == "free" for s in stats[:-1])


def test_stats_recomputed_after_writes(store, make_fields):
    """Test that statistics follow store writes."""
    engine = StatisticsEngine(store)
    add_minutes(store, make_fields, "monday", 60)
    assert engine.get_day_stats("monday").total_minutes == 60
    store.clear_all()
    assert engine.get_day_stats("monday").total_minutes == 0


def test_weekly_target_percentage():
    """Test the weekly target percentage."""
    def week(total):
        return WeekStats(total, 0, total / 7, None, None, classify_week(total))

    assert weekly_target_percentage(week(750)) == 50.0
    assert weekly_target_percentage(week(3000)) == 100.0
