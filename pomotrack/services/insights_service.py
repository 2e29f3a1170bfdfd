import logging
import math
import re
from typing import Any, Dict, List, Optional

from pomotrack.repositories.insights_repository import InsightsRepository
from pomotrack.schemas.insights import AnalyzeRequest
from pomotrack.services.sentiment_service import SentimentClassifier
from pomotrack.utils.clock import Clock, system_clock
from pomotrack.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TIMER_ID_PREFIX = "timer_"
DEFAULT_RUN_TITLE = "Focus Session"


def format_run_id(session_id: int) -> str:
    return f"{TIMER_ID_PREFIX}{session_id}"


def parse_run_id(raw: Any) -> int:
    """Accept 123, "123" and "timer_123"."""
    if isinstance(raw, bool):
        raise ValidationError("Invalid id format")
    if isinstance(raw, int):
        if raw < 0:
            raise ValidationError("Invalid id format")
        return raw

    value = str(raw).strip()
    if value.startswith(TIMER_ID_PREFIX):
        value = value[len(TIMER_ID_PREFIX):]
    # Plain ASCII digits only; no signs or digit grouping
    if not re.fullmatch(r"[0-9]+", value):
        raise ValidationError("Invalid id format")
    return int(value)


class InsightsService:
    def __init__(
        self,
        repository: InsightsRepository,
        clock: Clock = system_clock,
        classifier: Optional[SentimentClassifier] = None,
    ):
        self.repository = repository
        self.clock = clock
        self.classifier = classifier

    def list_completed_sessions(self, user_id: str) -> List[Dict]:
        sessions = []
        for run in self.repository.get_completed_runs(user_id):
            title = self.repository.get_template_name_by_id(run["template_id"]) or DEFAULT_RUN_TITLE

            sentiment = None
            if run["sentiment_label"]:
                score = run["sentiment_score"]
                sentiment = {
                    "label": str(run["sentiment_label"]),
                    "score": float(score) if score is not None else None,
                }

            sessions.append({
                "id": format_run_id(run["rep_id"]),
                "title": title,
                "date": run["rep_date"],
                "duration": run["total_focus_min"] or 0,
                "notes": run["notes"] or "",
                "sentiment": sentiment,
                "analyzedAt": run["analyzed_at"],
            })
        return sessions

    def analyze_session(self, user_id: str, payload: AnalyzeRequest) -> Dict:
        """
        Record a sentiment result on one timer session.

        Grouped sessions report under the group's representative id so that
        analyses of any cycle in a run land on the same display record.
        """
        if payload.id is None or payload.id == "" or payload.id == 0:
            raise ValidationError("id is required")
        session_id = parse_run_id(payload.id)

        row = self.repository.find_timer_session_for_user(session_id, user_id)
        if not row:
            raise NotFoundError("Timer session not found")

        notes = row.notes
        if payload.notes is not None:
            notes = payload.notes
            self.repository.update_notes(session_id, user_id, notes)

        label = payload.sentiment_label
        score = self._parse_score(payload.sentiment_score)

        if label is None and self.classifier is not None and notes:
            label, score = self.classifier.classify(notes)
            logger.info("Classified notes of timer %s as %s (%.2f)", session_id, label, score)

        timestamp = self.clock.now()
        self.repository.update_timer_sentiment(session_id, user_id, timestamp, label, score)

        rep_id = session_id
        if row.session_group_id:
            rep_id = self.repository.get_representative_id_for_group(user_id, row.session_group_id) or session_id

        return {
            "id": format_run_id(rep_id),
            "analyzedAt": timestamp,
            "sentiment": {"label": label, "score": score},
        }

    def get_stats(self, user_id: str) -> Dict[str, int]:
        return self.repository.get_sentiment_counts(user_id)

    @staticmethod
    def _parse_score(raw: Any) -> Optional[float]:
        if raw is None:
            return None
        if isinstance(raw, bool):
            raise ValidationError("sentiment_score must be numeric")
        try:
            score = float(raw)
        except (TypeError, ValueError):
            raise ValidationError("sentiment_score must be numeric")
        if not math.isfinite(score):
            raise ValidationError("sentiment_score must be numeric")
        return score
