from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from pomotrack.models.models import SessionTemplate


class TemplateRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str) -> List[SessionTemplate]:
        return (self.db.query(SessionTemplate)
                .filter(SessionTemplate.user_id == user_id)
                .order_by(SessionTemplate.created_at.desc(), SessionTemplate.id.desc())
                .all())

    def get_by_id_for_user(self, template_id: int, user_id: str) -> Optional[SessionTemplate]:
        return (self.db.query(SessionTemplate)
                .filter(SessionTemplate.id == template_id, SessionTemplate.user_id == user_id)
                .first())

    def create(self, user_id: str, data: Dict, created_at: datetime) -> SessionTemplate:
        template = SessionTemplate(user_id=user_id, created_at=created_at, updated_at=created_at, **data)
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        return template

    def update(self, template_id: int, user_id: str, data: Dict, updated_at: datetime) -> Optional[SessionTemplate]:
        template = self.get_by_id_for_user(template_id, user_id)
        if template is None:
            return None
        for key, value in data.items():
            setattr(template, key, value)
        template.updated_at = updated_at
        self.db.commit()
        self.db.refresh(template)
        return template

    def delete_with_dependents(self, template_id: int, user_id: str) -> bool:
        """Delete a template and its schedule entries; timer sessions are detached"""
        template = self.get_by_id_for_user(template_id, user_id)
        if template is None:
            return False
        for timer_session in template.timer_sessions:
            timer_session.template_id = None
        self.db.delete(template)
        self.db.commit()
        return True
