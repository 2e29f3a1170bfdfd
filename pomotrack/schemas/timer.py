from pydantic import BaseModel
from typing import Any, Optional, Union
from datetime import datetime

class TimerStart(BaseModel):
    template_id: Optional[int] = None
    # Validated by the timer service so that bad values map to a 400
    duration_minutes: Any = None
    phase: str = "focus"
    current_cycle: int = 0
    target_cycles: int = 4
    session_group_id: Optional[Union[str, int]] = None

class TimerComplete(BaseModel):
    timer_id: Optional[Union[int, str]] = None

class NotesUpdate(BaseModel):
    notes: Optional[str] = None

class TimerSessionResponse(BaseModel):
    id: int
    user_id: str
    template_id: Optional[int] = None
    duration_minutes: int
    phase: str
    current_cycle: int
    target_cycles: int
    completed: bool
    paused: bool
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    created_at: datetime
    notes: Optional[str] = None
    sentiment_label: Optional[str] = None
    sentiment_score: Optional[float] = None
    analyzed_at: Optional[datetime] = None
    session_group_id: Optional[str] = None

    class Config:
        from_attributes = True
