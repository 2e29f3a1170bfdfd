from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from pomotrack.models.models import ScheduledSession, SessionTemplate


class ScheduleRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[ScheduledSession]:
        query = self.db.query(ScheduledSession).filter(ScheduledSession.user_id == user_id)
        if start is not None:
            query = query.filter(ScheduledSession.start_datetime >= start)
        if end is not None:
            query = query.filter(ScheduledSession.start_datetime <= end)
        return query.order_by(ScheduledSession.start_datetime.asc()).all()

    def get_by_id_for_user(self, entry_id: int, user_id: str) -> Optional[ScheduledSession]:
        return (self.db.query(ScheduledSession)
                .filter(ScheduledSession.id == entry_id, ScheduledSession.user_id == user_id)
                .first())

    def create(self, user_id: str, data: Dict, created_at: datetime) -> ScheduledSession:
        entry = ScheduledSession(user_id=user_id, created_at=created_at, **data)
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def update(self, entry_id: int, user_id: str, data: Dict) -> Optional[ScheduledSession]:
        entry = self.get_by_id_for_user(entry_id, user_id)
        if entry is None:
            return None
        for key, value in data.items():
            setattr(entry, key, value)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete(self, entry_id: int, user_id: str) -> bool:
        entry = self.get_by_id_for_user(entry_id, user_id)
        if entry is None:
            return False
        self.db.delete(entry)
        self.db.commit()
        return True

    def template_belongs_to_user(self, template_id: Optional[int], user_id: str) -> bool:
        if not template_id:
            return False
        return (self.db.query(SessionTemplate.id)
                .filter(SessionTemplate.id == template_id, SessionTemplate.user_id == user_id)
                .first()) is not None
