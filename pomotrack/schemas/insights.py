from pydantic import BaseModel
from typing import Any, List, Optional, Union
from datetime import datetime

class SentimentResult(BaseModel):
    label: Optional[str] = None
    score: Optional[float] = None

class AnalyzeRequest(BaseModel):
    id: Optional[Union[int, str]] = None
    sentiment_label: Optional[str] = None
    # Coerced and validated by the insights service
    sentiment_score: Any = None
    notes: Optional[str] = None

class AnalyzeResponse(BaseModel):
    id: str
    analyzedAt: datetime
    sentiment: SentimentResult

class CompletedSession(BaseModel):
    id: str
    title: str
    date: Optional[datetime] = None
    duration: int
    notes: str = ""
    sentiment: Optional[SentimentResult] = None
    analyzedAt: Optional[datetime] = None

class CompletedSessionsResponse(BaseModel):
    sessions: List[CompletedSession]

class InsightStats(BaseModel):
    total: int
    completed: int
    analyzed: int
    positive: int
    neutral: int
    negative: int
