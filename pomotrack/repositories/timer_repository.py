from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from pomotrack.models.models import TimerSession


class TimerRepository:
    """Persistence for timer sessions, always scoped by user"""

    def __init__(self, db: Session):
        self.db = db

    def get_active_session(self, user_id: str) -> Optional[TimerSession]:
        # Most recent uncompleted row; there should only ever be one
        return (self.db.query(TimerSession)
                .filter(TimerSession.user_id == user_id, TimerSession.completed.is_(False))
                .order_by(TimerSession.created_at.desc(), TimerSession.id.desc())
                .first())

    def create_session(
        self,
        user_id: str,
        duration_minutes: int,
        phase: str,
        start_time: datetime,
        created_at: datetime,
        template_id: Optional[int] = None,
        current_cycle: int = 0,
        target_cycles: int = 4,
        session_group_id: Optional[str] = None,
    ) -> int:
        session = TimerSession(
            user_id=user_id,
            template_id=template_id,
            duration_minutes=duration_minutes,
            phase=phase,
            current_cycle=current_cycle,
            target_cycles=target_cycles,
            completed=False,
            paused=False,
            start_time=start_time,
            created_at=created_at,
            session_group_id=session_group_id,
        )
        self.db.add(session)
        self.db.commit()
        return session.id

    def get_session_by_id(self, session_id: int) -> Optional[TimerSession]:
        return self.db.get(TimerSession, session_id)

    def get_session_by_id_for_user(self, session_id: int, user_id: str) -> Optional[TimerSession]:
        return (self.db.query(TimerSession)
                .filter(TimerSession.id == session_id, TimerSession.user_id == user_id)
                .first())

    def update_paused_status(self, session_id: int, user_id: str, paused: bool) -> Optional[TimerSession]:
        session = self.get_session_by_id_for_user(session_id, user_id)
        if session is None:
            return None
        session.paused = paused
        self.db.commit()
        self.db.refresh(session)
        return session

    def complete_session(self, session_id: int, user_id: str, end_time: datetime) -> Optional[TimerSession]:
        session = self.get_session_by_id_for_user(session_id, user_id)
        if session is None:
            return None
        session.completed = True
        session.paused = False
        session.end_time = end_time
        self.db.commit()
        self.db.refresh(session)
        return session

    def update_session_notes(self, session_id: int, user_id: str, notes: Optional[str]) -> Optional[TimerSession]:
        session = self.get_session_by_id_for_user(session_id, user_id)
        if session is None:
            return None
        session.notes = notes
        self.db.commit()
        self.db.refresh(session)
        return session

    def get_history(self, user_id: str, limit: int) -> List[TimerSession]:
        return (self.db.query(TimerSession)
                .filter(TimerSession.user_id == user_id)
                .order_by(TimerSession.created_at.desc(), TimerSession.id.desc())
                .limit(limit)
                .all())
