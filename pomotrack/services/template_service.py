import math
from typing import Any, Dict, List

from pomotrack.models.models import SessionTemplate
from pomotrack.repositories.template_repository import TemplateRepository
from pomotrack.schemas.templates import TemplateCreate
from pomotrack.utils.clock import Clock, system_clock
from pomotrack.utils.errors import NotFoundError, ValidationError


class TemplateService:
    """CRUD for reusable session definitions"""

    def __init__(self, repository: TemplateRepository, clock: Clock = system_clock):
        self.repository = repository
        self.clock = clock

    def list_templates(self, user_id: str) -> List[SessionTemplate]:
        return self.repository.list_for_user(user_id)

    def create_template(self, user_id: str, payload: TemplateCreate) -> SessionTemplate:
        data = self._validate_payload(payload)
        return self.repository.create(user_id, data, self.clock.now())

    def get_template(self, user_id: str, template_id: int) -> SessionTemplate:
        template = self.repository.get_by_id_for_user(template_id, user_id)
        if not template:
            raise NotFoundError("Session not found")
        return template

    def update_template(self, user_id: str, template_id: int, payload: TemplateCreate) -> SessionTemplate:
        data = self._validate_payload(payload)
        updated = self.repository.update(template_id, user_id, data, self.clock.now())
        if not updated:
            raise NotFoundError("Session not found")
        return updated

    def delete_template(self, user_id: str, template_id: int) -> None:
        if not self.repository.delete_with_dependents(template_id, user_id):
            raise NotFoundError("Session not found")

    @staticmethod
    def _parse_minutes(value: Any, label: str) -> int:
        message = f"{label} duration must be at least 1 minute"
        if value is None or isinstance(value, bool):
            raise ValidationError(message)
        try:
            minutes = float(value)
        except (TypeError, ValueError):
            raise ValidationError(message)
        if not math.isfinite(minutes) or minutes < 1:
            raise ValidationError(message)
        return int(minutes)

    def _validate_payload(self, payload: TemplateCreate) -> Dict:
        if not payload.name or not payload.name.strip():
            raise ValidationError("Name is required")

        return {
            "name": payload.name.strip(),
            "focus_duration": self._parse_minutes(payload.focus_duration, "Focus"),
            "break_duration": self._parse_minutes(payload.break_duration, "Break"),
            "description": payload.description,
        }
