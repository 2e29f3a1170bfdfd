from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pomotrack.models.models import ScheduledSession, SessionTemplate, TimerSession
from pomotrack.utils.clock import as_date


class DashboardRepository:
    """Read-only queries backing the dashboard analytics"""

    def __init__(self, db: Session):
        self.db = db

    def _session_date(self):
        return func.date(TimerSession.start_time)

    def _completed_for_user(self, user_id: str):
        return (TimerSession.user_id == user_id, TimerSession.completed.is_(True))

    def get_distinct_dates_desc(self, user_id: str) -> List[date]:
        session_date = self._session_date().label('session_date')
        rows = (self.db.query(session_date)
                .filter(*self._completed_for_user(user_id))
                .distinct()
                .order_by(session_date.desc())
                .all())
        return [as_date(row.session_date) for row in rows if row.session_date is not None]

    def get_distinct_dates_asc(self, user_id: str) -> List[date]:
        session_date = self._session_date().label('session_date')
        rows = (self.db.query(session_date)
                .filter(*self._completed_for_user(user_id))
                .distinct()
                .order_by(session_date.asc())
                .all())
        return [as_date(row.session_date) for row in rows if row.session_date is not None]

    def get_total_active_days(self, user_id: str) -> int:
        total = (self.db.query(func.count(func.distinct(self._session_date())))
                 .filter(*self._completed_for_user(user_id))
                 .scalar())
        return int(total or 0)

    def get_last_completed_date(self, user_id: str) -> Optional[date]:
        row = (self.db.query(TimerSession.start_time)
               .filter(*self._completed_for_user(user_id), TimerSession.start_time.isnot(None))
               .order_by(TimerSession.start_time.desc())
               .first())
        return as_date(row.start_time) if row else None

    def get_today_schedule(self, user_id: str, date_str: str) -> List[Dict]:
        """Scheduled sessions starting on the given YYYY-MM-DD day, joined with their template"""
        day_start = datetime.combine(date.fromisoformat(date_str), datetime.min.time())
        day_end = day_start + timedelta(days=1)

        rows = (self.db.query(
                    ScheduledSession.id,
                    ScheduledSession.template_id,
                    ScheduledSession.title,
                    ScheduledSession.start_datetime,
                    ScheduledSession.duration_min,
                    ScheduledSession.completed,
                    SessionTemplate.name.label('template_name'),
                    SessionTemplate.focus_duration,
                    SessionTemplate.break_duration,
                )
                .outerjoin(SessionTemplate, ScheduledSession.template_id == SessionTemplate.id)
                .filter(ScheduledSession.user_id == user_id,
                        ScheduledSession.start_datetime >= day_start,
                        ScheduledSession.start_datetime < day_end)
                .order_by(ScheduledSession.start_datetime.asc())
                .all())
        return [dict(row._mapping) for row in rows]

    def get_seven_day_stats(self, user_id: str, since: datetime) -> Dict:
        row = (self.db.query(
                    func.count(TimerSession.id).label('sessions_completed'),
                    func.sum(TimerSession.duration_minutes).label('total_focus_time'),
                    func.avg(TimerSession.duration_minutes).label('average_session'),
                )
                .filter(*self._completed_for_user(user_id),
                        TimerSession.phase == 'focus',
                        TimerSession.start_time >= since)
                .one())
        return {
            "sessions_completed": int(row.sessions_completed or 0),
            "total_focus_time": int(row.total_focus_time or 0),
            "average_session": float(row.average_session or 0),
        }

    def get_templates(self, user_id: str) -> List[Dict]:
        templates = (self.db.query(SessionTemplate)
                     .filter(SessionTemplate.user_id == user_id)
                     .order_by(SessionTemplate.created_at.desc(), SessionTemplate.id.desc())
                     .all())
        return [
            {
                "id": t.id,
                "name": t.name,
                "focus_duration": t.focus_duration,
                "break_duration": t.break_duration,
                "description": t.description,
            }
            for t in templates
        ]
