from pydantic import BaseModel
from typing import List, Optional

class StreakSummary(BaseModel):
    currentStreak: int
    longestStreak: int
    totalDays: int
    lastLoginDate: str

class ScheduleItem(BaseModel):
    id: str
    time: str
    title: str
    duration: str
    type: str = "focus"
    completed: bool = False

class WeeklyStats(BaseModel):
    totalFocusTime: int
    sessionsCompleted: int
    averageSession: int

class TemplateSummary(BaseModel):
    id: int
    name: str
    focus_duration: int
    break_duration: int
    description: Optional[str] = None

    class Config:
        from_attributes = True

class DashboardOverview(BaseModel):
    streak: StreakSummary
    todaysSchedule: List[ScheduleItem]
    templates: List[TemplateSummary]
