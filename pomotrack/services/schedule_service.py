import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from pomotrack.models.models import ScheduledSession
from pomotrack.repositories.schedule_repository import ScheduleRepository
from pomotrack.schemas.schedule import ScheduleCreate
from pomotrack.utils.clock import Clock, system_clock, to_naive_utc
from pomotrack.utils.errors import NotFoundError, ValidationError


class ScheduleService:
    """Calendar entries; read back by the dashboard as today's agenda"""

    def __init__(self, repository: ScheduleRepository, clock: Clock = system_clock):
        self.repository = repository
        self.clock = clock

    def list_entries(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[ScheduledSession]:
        return self.repository.list_for_user(user_id, start, end)

    def create_entry(self, user_id: str, payload: ScheduleCreate) -> ScheduledSession:
        data = self._validate_payload(user_id, payload, allow_null_title=False)
        return self.repository.create(user_id, data, self.clock.now())

    def update_entry(self, user_id: str, entry_id: int, payload: ScheduleCreate) -> ScheduledSession:
        data = self._validate_payload(user_id, payload, allow_null_title=True)
        updated = self.repository.update(entry_id, user_id, data)
        if not updated:
            raise NotFoundError("Scheduled session not found")
        return updated

    def delete_entry(self, user_id: str, entry_id: int) -> None:
        if not self.repository.delete(entry_id, user_id):
            raise NotFoundError("Scheduled session not found")

    def _validate_payload(self, user_id: str, payload: ScheduleCreate, allow_null_title: bool) -> Dict:
        if payload.start_datetime is None:
            raise ValidationError("start_datetime is required")

        if not payload.template_id and not payload.title and not allow_null_title:
            raise ValidationError("provide template_id or title")

        duration = self._parse_duration(payload.duration_min)

        if payload.template_id and not self.repository.template_belongs_to_user(payload.template_id, user_id):
            raise ValidationError("Invalid template_id")

        start = to_naive_utc(payload.start_datetime)

        return {
            "template_id": payload.template_id,
            "title": payload.title,
            "start_datetime": start,
            "duration_min": duration,
            "completed": payload.completed,
        }

    @staticmethod
    def _parse_duration(value: Any) -> int:
        if value is None or isinstance(value, bool):
            raise ValidationError("duration_min must be > 0")
        try:
            duration = float(value)
        except (TypeError, ValueError):
            raise ValidationError("duration_min must be > 0")
        if not math.isfinite(duration) or duration <= 0:
            raise ValidationError("duration_min must be > 0")
        return math.ceil(duration)
