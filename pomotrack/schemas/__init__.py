from .timer import TimerStart, TimerComplete, NotesUpdate, TimerSessionResponse
from .dashboard import (
    StreakSummary,
    ScheduleItem,
    WeeklyStats,
    TemplateSummary,
    DashboardOverview
)
from .insights import (
    SentimentResult,
    AnalyzeRequest,
    AnalyzeResponse,
    CompletedSession,
    CompletedSessionsResponse,
    InsightStats
)
from .templates import TemplateCreate, TemplateUpdate, TemplateResponse
from .schedule import ScheduleCreate, ScheduleUpdate, ScheduleResponse

__all__ = [
    'TimerStart',
    'TimerComplete',
    'NotesUpdate',
    'TimerSessionResponse',
    'StreakSummary',
    'ScheduleItem',
    'WeeklyStats',
    'TemplateSummary',
    'DashboardOverview',
    'SentimentResult',
    'AnalyzeRequest',
    'AnalyzeResponse',
    'CompletedSession',
    'CompletedSessionsResponse',
    'InsightStats',
    'TemplateCreate',
    'TemplateUpdate',
    'TemplateResponse',
    'ScheduleCreate',
    'ScheduleUpdate',
    'ScheduleResponse',
]
