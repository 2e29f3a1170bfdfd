from pydantic import BaseModel
from typing import Any, Optional
from datetime import datetime

class TemplateCreate(BaseModel):
    name: Optional[str] = None
    focus_duration: Any = None
    break_duration: Any = None
    description: Optional[str] = None

class TemplateUpdate(TemplateCreate):
    pass

class TemplateResponse(BaseModel):
    id: int
    user_id: str
    name: str
    focus_duration: int
    break_duration: int
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
