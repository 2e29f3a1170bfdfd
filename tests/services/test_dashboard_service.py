import pytest
from datetime import date, datetime, timedelta
from sqlalchemy.orm import Session

from pomotrack.models.models import ScheduledSession
from pomotrack.repositories.dashboard_repository import DashboardRepository
from pomotrack.services.dashboard_service import (
    DashboardService,
    current_streak,
    longest_streak,
    round_half_up,
)

USER = "user-dashboard"
TODAY = date(2026, 10, 18)


@pytest.fixture
def dashboard_service(db: Session, clock):
    return DashboardService(DashboardRepository(db), clock)


def days_ago(n: int, hour: int = 8) -> datetime:
    return datetime.combine(TODAY - timedelta(days=n), datetime.min.time()) + timedelta(hours=hour)


# Pure streak helpers

def test_current_streak_contiguous():
    dates = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)]
    assert current_streak(dates, TODAY) == 3


def test_current_streak_gap_before_today():
    """Test that a streak not touching today is zero, even if it ended yesterday"""
    assert current_streak([TODAY - timedelta(days=2)], TODAY) == 0
    assert current_streak([TODAY - timedelta(days=1)], TODAY) == 0


def test_current_streak_stops_at_first_gap():
    dates = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=3), TODAY - timedelta(days=4)]
    assert current_streak(dates, TODAY) == 2


def test_current_streak_empty():
    assert current_streak([], TODAY) == 0


def test_longest_streak():
    d1 = date(2026, 9, 1)
    dates = [d1, d1 + timedelta(days=1), d1 + timedelta(days=2), d1 + timedelta(days=5)]
    assert longest_streak(dates) == 3


def test_longest_streak_edge_cases():
    assert longest_streak([]) == 0
    assert longest_streak([TODAY]) == 1
    assert longest_streak([TODAY - timedelta(days=10), TODAY]) == 1


def test_longest_streak_later_run_wins():
    d1 = date(2026, 9, 1)
    dates = [d1, d1 + timedelta(days=1), d1 + timedelta(days=4), d1 + timedelta(days=5), d1 + timedelta(days=6)]
    assert longest_streak(dates) == 3


@pytest.mark.parametrize("value,expected", [(0, 0), (29.4, 29), (29.5, 30), (30.5, 31), (30, 30)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


# Streak summary

def test_streak_summary(dashboard_service, make_timer_session):
    """Test streak metrics derived from completed sessions"""
    for n in (0, 1, 2, 6, 7):
        make_timer_session(USER, start_time=days_ago(n))
    # Second session on the same day counts once
    make_timer_session(USER, start_time=days_ago(0, hour=15))
    # Uncompleted sessions do not count
    make_timer_session(USER, start_time=days_ago(3), completed=False)

    summary = dashboard_service.get_streak_summary(USER)

    assert summary == {
        "currentStreak": 3,
        "longestStreak": 3,
        "totalDays": 5,
        "lastLoginDate": "2026-10-18",
    }


def test_streak_summary_no_sessions(dashboard_service):
    summary = dashboard_service.get_streak_summary(USER)

    assert summary["currentStreak"] == 0
    assert summary["longestStreak"] == 0
    assert summary["totalDays"] == 0
    assert summary["lastLoginDate"] == "2026-10-18"


def test_streak_summary_inactive_today(dashboard_service, make_timer_session):
    make_timer_session(USER, start_time=days_ago(2))

    summary = dashboard_service.get_streak_summary(USER)

    assert summary["currentStreak"] == 0
    assert summary["longestStreak"] == 1
    assert summary["lastLoginDate"] == "2026-10-16"


def test_streak_summary_is_user_scoped(dashboard_service, make_timer_session):
    make_timer_session("someone-else", start_time=days_ago(0))

    assert dashboard_service.get_streak_summary(USER)["totalDays"] == 0


# Weekly stats

def test_weekly_stats(dashboard_service, make_timer_session):
    """Test 7-day focus totals"""
    make_timer_session(USER, start_time=days_ago(1), duration_minutes=25)
    make_timer_session(USER, start_time=days_ago(3), duration_minutes=35)

    stats = dashboard_service.get_stats(USER)

    assert stats == {"totalFocusTime": 60, "sessionsCompleted": 2, "averageSession": 30}


def test_weekly_stats_excludes_other_rows(dashboard_service, make_timer_session):
    """Test that old, unfinished and break sessions are left out"""
    make_timer_session(USER, start_time=days_ago(1), duration_minutes=25)
    make_timer_session(USER, start_time=days_ago(1), duration_minutes=26)
    make_timer_session(USER, start_time=days_ago(9), duration_minutes=50)
    make_timer_session(USER, start_time=days_ago(0), duration_minutes=45, completed=False)
    make_timer_session(USER, start_time=days_ago(0), duration_minutes=5, phase="short_break")

    stats = dashboard_service.get_stats(USER)

    assert stats["totalFocusTime"] == 51
    assert stats["sessionsCompleted"] == 2
    assert stats["averageSession"] == 26


def test_weekly_stats_empty(dashboard_service):
    assert dashboard_service.get_stats(USER) == {
        "totalFocusTime": 0,
        "sessionsCompleted": 0,
        "averageSession": 0,
    }


# Today's schedule

def test_today_schedule_fallbacks(dashboard_service, make_template, make_scheduled_session):
    """Test title and duration fallback chains"""
    template = make_template(USER, name="Writing Sprint", focus_duration=45)
    make_scheduled_session(USER, datetime(2026, 10, 18, 14, 0), title="Read papers", duration_min=40)
    make_scheduled_session(USER, datetime(2026, 10, 18, 9, 5), template_id=template.id)
    make_scheduled_session(USER, datetime(2026, 10, 18, 18, 30))
    # Not today
    make_scheduled_session(USER, datetime(2026, 10, 19, 9, 0), title="Tomorrow")
    make_scheduled_session(USER, datetime(2026, 10, 17, 23, 59), title="Yesterday")

    schedule = dashboard_service.get_today_schedule(USER)

    assert [item["time"] for item in schedule] == ["09:05", "14:00", "18:30"]
    assert [item["title"] for item in schedule] == ["Writing Sprint", "Read papers", "Untitled Session"]
    assert [item["duration"] for item in schedule] == ["45 min", "40 min", "25 min"]
    assert all(item["type"] == "focus" for item in schedule)
    assert all(isinstance(item["id"], str) for item in schedule)


def test_overview(dashboard_service, make_template, make_timer_session, make_scheduled_session):
    """Test that overview composes streak, schedule and templates"""
    make_template(USER, name="Deep Work")
    make_timer_session(USER, start_time=days_ago(0))
    make_scheduled_session(USER, datetime(2026, 10, 18, 11, 0), title="Review")

    overview = dashboard_service.get_overview(USER)

    assert overview["streak"]["currentStreak"] == 1
    assert [item["title"] for item in overview["todaysSchedule"]] == ["Review"]
    assert [t["name"] for t in overview["templates"]] == ["Deep Work"]


def test_unset_duration_is_stored_as_null(dashboard_service, make_template, make_scheduled_session, db: Session):
    """Test that a templated entry without minutes keeps NULL and reads the template's focus duration"""
    template = make_template(USER, name="Long Focus", focus_duration=45)
    entry = make_scheduled_session(USER, datetime(2026, 10, 18, 10, 0), template_id=template.id, duration_min=None)

    db.expire_all()
    assert db.get(ScheduledSession, entry.id).duration_min is None
    assert dashboard_service.get_today_schedule(USER)[0]["duration"] == "45 min"
