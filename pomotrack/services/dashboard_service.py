import math
from datetime import date, timedelta
from typing import Dict, List, Sequence

from pomotrack.repositories.dashboard_repository import DashboardRepository
from pomotrack.utils.clock import Clock, system_clock, to_date_string, today

DEFAULT_SCHEDULE_MINUTES = 25
STATS_WINDOW = timedelta(days=7)


def current_streak(dates_desc: Sequence[date], reference_day: date) -> int:
    """Consecutive active days counting back from reference_day; 0 when that day is not active"""
    streak = 0
    for i, session_date in enumerate(dates_desc):
        if session_date != reference_day - timedelta(days=i):
            break
        streak += 1
    return streak


def longest_streak(dates_asc: Sequence[date]) -> int:
    """Longest run of consecutive calendar days in an ascending date sequence"""
    if not dates_asc:
        return 0

    longest = 1
    running = 1
    for previous, current in zip(dates_asc, dates_asc[1:]):
        if (current - previous).days == 1:
            running += 1
            longest = max(longest, running)
        else:
            running = 1
    return longest


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class DashboardService:
    def __init__(self, repository: DashboardRepository, clock: Clock = system_clock):
        self.repository = repository
        self.clock = clock

    def get_streak_summary(self, user_id: str) -> Dict:
        current_day = today(self.clock)

        last_date = self.repository.get_last_completed_date(user_id)
        return {
            "currentStreak": current_streak(self.repository.get_distinct_dates_desc(user_id), current_day),
            "longestStreak": longest_streak(self.repository.get_distinct_dates_asc(user_id)),
            "totalDays": self.repository.get_total_active_days(user_id),
            "lastLoginDate": to_date_string(last_date or current_day),
        }

    def get_today_schedule(self, user_id: str) -> List[Dict]:
        rows = self.repository.get_today_schedule(user_id, to_date_string(today(self.clock)))

        return [
            {
                "id": str(row["id"]),
                "time": row["start_datetime"].strftime("%H:%M"),
                "title": row["title"] or row["template_name"] or "Untitled Session",
                "duration": f"{row['duration_min'] or row['focus_duration'] or DEFAULT_SCHEDULE_MINUTES} min",
                "type": "focus",
                "completed": bool(row["completed"]),
            }
            for row in rows
        ]

    def get_stats(self, user_id: str) -> Dict:
        """Focus totals over the trailing seven days"""
        since = self.clock.now() - STATS_WINDOW
        stats = self.repository.get_seven_day_stats(user_id, since)

        return {
            "totalFocusTime": stats["total_focus_time"] or 0,
            "sessionsCompleted": stats["sessions_completed"] or 0,
            "averageSession": round_half_up(stats["average_session"] or 0),
        }

    def get_overview(self, user_id: str) -> Dict:
        return {
            "streak": self.get_streak_summary(user_id),
            "todaysSchedule": self.get_today_schedule(user_id),
            "templates": self.repository.get_templates(user_id),
        }
