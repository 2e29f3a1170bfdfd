from collections import OrderedDict
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pomotrack.models.models import SessionTemplate, TimerSession

COMPLETED_RUNS_LIMIT = 300


def _run_date(session: TimerSession) -> Optional[datetime]:
    return session.end_time or session.start_time or session.created_at


class InsightsRepository:
    """Queries behind the insights view: completed runs and their sentiment"""

    def __init__(self, db: Session):
        self.db = db

    def get_completed_runs(self, user_id: str) -> List[Dict]:
        """
        Collapse completed timer sessions into runs.

        A grouped run counts once its completed focus blocks reach the group's
        target cycles. Completed focus rows without a group are runs of their own.

        Returns:
            Run dicts, most recent first, at most COMPLETED_RUNS_LIMIT of them
        """
        sessions = (self.db.query(TimerSession)
                    .filter(TimerSession.user_id == user_id, TimerSession.completed.is_(True))
                    .order_by(TimerSession.id.asc())
                    .all())

        groups: "OrderedDict[str, List[TimerSession]]" = OrderedDict()
        runs = []
        for session in sessions:
            if session.session_group_id:
                groups.setdefault(session.session_group_id, []).append(session)
            elif session.phase == 'focus':
                runs.append({
                    "session_group_id": None,
                    "rep_id": session.id,
                    "rep_date": _run_date(session),
                    "total_focus_min": session.duration_minutes,
                    "focus_blocks": 1,
                    "target_cycles": session.target_cycles,
                    "analyzed_at": session.analyzed_at,
                    "sentiment_label": session.sentiment_label,
                    "sentiment_score": session.sentiment_score,
                    "template_id": session.template_id,
                    "notes": session.notes,
                })

        for group_id, members in groups.items():
            focus = [m for m in members if m.phase == 'focus']
            target_cycles = max(m.target_cycles or 0 for m in members)
            if len(focus) < target_cycles:
                continue

            analyzed = [m for m in members if m.sentiment_label is not None]
            latest = max(analyzed, key=lambda m: m.analyzed_at or datetime.min) if analyzed else None
            analyzed_times = [m.analyzed_at for m in members if m.analyzed_at is not None]
            template_ids = [m.template_id for m in members if m.template_id is not None]
            dates = [d for d in (_run_date(m) for m in members) if d is not None]
            notes = [m.notes for m in members if m.notes]

            runs.append({
                "session_group_id": group_id,
                "rep_id": min(m.id for m in members),
                "rep_date": max(dates) if dates else None,
                "total_focus_min": sum(m.duration_minutes for m in focus),
                "focus_blocks": len(focus),
                "target_cycles": target_cycles,
                "analyzed_at": max(analyzed_times) if analyzed_times else None,
                "sentiment_label": latest.sentiment_label if latest else None,
                "sentiment_score": latest.sentiment_score if latest else None,
                "template_id": max(template_ids) if template_ids else None,
                "notes": notes[-1] if notes else None,
            })

        runs.sort(key=lambda r: r["rep_date"] or datetime.min, reverse=True)
        return runs[:COMPLETED_RUNS_LIMIT]

    def get_template_name_by_id(self, template_id: Optional[int]) -> Optional[str]:
        if not template_id:
            return None
        template = self.db.get(SessionTemplate, template_id)
        return template.name if template else None

    def find_timer_session_for_user(self, session_id: int, user_id: str) -> Optional[TimerSession]:
        return (self.db.query(TimerSession)
                .filter(TimerSession.id == session_id, TimerSession.user_id == user_id)
                .first())

    def update_notes(self, session_id: int, user_id: str, notes: Optional[str]) -> None:
        session = self.find_timer_session_for_user(session_id, user_id)
        if session is None:
            return
        session.notes = notes
        self.db.commit()

    def update_timer_sentiment(
        self,
        session_id: int,
        user_id: str,
        timestamp: datetime,
        label: Optional[str],
        score: Optional[float],
    ) -> None:
        session = self.find_timer_session_for_user(session_id, user_id)
        if session is None:
            return
        session.analyzed_at = timestamp
        session.sentiment_label = label
        session.sentiment_score = score
        self.db.commit()

    def get_representative_id_for_group(self, user_id: str, group_id: Optional[str]) -> Optional[int]:
        # Smallest id in the group is its representative
        if not group_id:
            return None
        return (self.db.query(func.min(TimerSession.id))
                .filter(TimerSession.user_id == user_id, TimerSession.session_group_id == group_id)
                .scalar())

    def get_sentiment_counts(self, user_id: str) -> Dict[str, int]:
        base = self.db.query(func.count(TimerSession.id)).filter(TimerSession.user_id == user_id)
        label = func.upper(TimerSession.sentiment_label)
        return {
            "total": base.scalar() or 0,
            "completed": base.filter(TimerSession.completed.is_(True)).scalar() or 0,
            "analyzed": base.filter(TimerSession.sentiment_label.isnot(None)).scalar() or 0,
            "positive": base.filter(label == 'POSITIVE').scalar() or 0,
            "neutral": base.filter(label == 'NEUTRAL').scalar() or 0,
            "negative": base.filter(label == 'NEGATIVE').scalar() or 0,
        }
