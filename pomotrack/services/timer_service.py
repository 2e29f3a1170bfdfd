import logging
import math
from typing import Any, List, Optional

from pomotrack.models.models import TimerSession, VALID_PHASES
from pomotrack.repositories.timer_repository import TimerRepository
from pomotrack.schemas.timer import TimerStart
from pomotrack.utils.clock import Clock, system_clock
from pomotrack.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 200


class TimerService:
    """
    Owns the per-user active timer.

    Idle -> Running <-> Paused -> Completed. A user's active timer is their
    latest session with completed = False; nothing leaves Completed.
    """

    def __init__(self, repository: TimerRepository, clock: Clock = system_clock):
        self.repository = repository
        self.clock = clock

    def get_active_session(self, user_id: str) -> Optional[TimerSession]:
        return self.repository.get_active_session(user_id)

    def start_timer(self, user_id: str, payload: TimerStart) -> TimerSession:
        """
        Start a new phase row. Used both for a fresh start and for moving to
        the next phase of a group; callers supply the phase and cycle.

        Args:
            user_id: Owner of the timer
            payload: Phase, duration and cycle/group bookkeeping

        Returns:
            The created TimerSession
        """
        duration = self._parse_duration(payload.duration_minutes)
        self._validate_phase(payload.phase)

        now = self.clock.now()
        group_id = payload.session_group_id
        session_id = self.repository.create_session(
            user_id=user_id,
            template_id=payload.template_id,
            duration_minutes=duration,
            phase=payload.phase,
            current_cycle=payload.current_cycle,
            target_cycles=payload.target_cycles,
            start_time=now,
            created_at=now,
            session_group_id=str(group_id) if group_id is not None else None,
        )
        logger.info("Started %s timer %s for user %s (%s min)", payload.phase, session_id, user_id, duration)
        return self.repository.get_session_by_id(session_id)

    def pause_timer(self, user_id: str) -> TimerSession:
        active = self._ensure_active_session(user_id, "pause")
        return self.repository.update_paused_status(active.id, user_id, True)

    def resume_timer(self, user_id: str) -> TimerSession:
        active = self._ensure_active_session(user_id, "resume")
        return self.repository.update_paused_status(active.id, user_id, False)

    def stop_timer(self, user_id: str) -> TimerSession:
        active = self._ensure_active_session(user_id, "stop")
        logger.info("Stopping timer %s for user %s", active.id, user_id)
        return self.repository.complete_session(active.id, user_id, self.clock.now())

    def complete_timer(self, user_id: str, timer_id: Any) -> TimerSession:
        if timer_id is None or timer_id == "":
            raise ValidationError("timer_id is required")

        timer_id = self._parse_id(timer_id)
        existing = self.repository.get_session_by_id_for_user(timer_id, user_id)
        if not existing:
            raise NotFoundError("Timer session not found")

        logger.info("Completing timer %s for user %s", timer_id, user_id)
        return self.repository.complete_session(timer_id, user_id, self.clock.now())

    def update_notes(self, user_id: str, timer_id: Any, notes: Optional[str] = None) -> TimerSession:
        timer_id = self._parse_id(timer_id)
        existing = self.repository.get_session_by_id_for_user(timer_id, user_id)
        if not existing:
            raise NotFoundError("Timer session not found")

        return self.repository.update_session_notes(timer_id, user_id, notes)

    def get_history(self, user_id: str, limit_raw: Any = None) -> List[TimerSession]:
        return self.repository.get_history(user_id, self._clamp_limit(limit_raw))

    def _ensure_active_session(self, user_id: str, action: str) -> TimerSession:
        active = self.repository.get_active_session(user_id)
        if not active:
            raise NotFoundError(f"No active timer to {action}")
        return active

    @staticmethod
    def _parse_duration(duration_minutes: Any) -> int:
        message = "duration_minutes is required and must be > 0"
        if duration_minutes is None or isinstance(duration_minutes, bool):
            raise ValidationError(message)
        try:
            duration = float(duration_minutes)
        except (TypeError, ValueError):
            raise ValidationError(message)
        if not math.isfinite(duration) or duration <= 0:
            raise ValidationError(message)
        # Stored in whole minutes; partial minutes round up
        return math.ceil(duration)

    @staticmethod
    def _validate_phase(phase: str) -> None:
        if phase not in VALID_PHASES:
            raise ValidationError(f"Invalid phase. Use one of: {', '.join(VALID_PHASES)}")

    @staticmethod
    def _parse_id(raw: Any) -> int:
        # Unparseable ids cannot match any row
        try:
            return int(str(raw).strip())
        except ValueError:
            raise NotFoundError("Timer session not found")

    @staticmethod
    def _clamp_limit(limit_raw: Any) -> int:
        """Absent, zero or non-numeric limits fall back to the default; the rest clamp to [1, 200]"""
        if limit_raw is None or isinstance(limit_raw, bool):
            return DEFAULT_HISTORY_LIMIT
        try:
            limit = float(limit_raw)
        except (TypeError, ValueError):
            return DEFAULT_HISTORY_LIMIT
        if not math.isfinite(limit) or limit == 0:
            return DEFAULT_HISTORY_LIMIT
        return int(min(MAX_HISTORY_LIMIT, max(1, limit)))
