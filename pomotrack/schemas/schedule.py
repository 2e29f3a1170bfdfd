from pydantic import BaseModel
from typing import Any, Optional
from datetime import datetime

from .dashboard import TemplateSummary

class ScheduleCreate(BaseModel):
    template_id: Optional[int] = None
    title: Optional[str] = None
    start_datetime: Optional[datetime] = None
    duration_min: Any = 25
    completed: bool = False

class ScheduleUpdate(ScheduleCreate):
    pass

class ScheduleResponse(BaseModel):
    id: int
    template_id: Optional[int] = None
    title: Optional[str] = None
    start_datetime: datetime
    duration_min: Optional[int] = None
    completed: bool
    template: Optional[TemplateSummary] = None

    class Config:
        from_attributes = True
