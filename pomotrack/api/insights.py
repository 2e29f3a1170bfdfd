from fastapi import APIRouter, Depends

from pomotrack.api.auth import get_current_user
from pomotrack.api.deps import get_insights_service
from pomotrack.api.metrics import sentiment_analyses, sentiment_label_value
from pomotrack.schemas.insights import AnalyzeRequest, AnalyzeResponse, CompletedSessionsResponse, InsightStats
from pomotrack.services.insights_service import InsightsService

router = APIRouter(prefix="/insights", tags=["insights"])

@router.get("/completed-sessions", response_model=CompletedSessionsResponse)
def list_completed_sessions(
    user_id: str = Depends(get_current_user),
    insights_service: InsightsService = Depends(get_insights_service)
):
    """Completed runs with any recorded sentiment"""
    return {"sessions": insights_service.list_completed_sessions(user_id)}

@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_session(
    payload: AnalyzeRequest,
    user_id: str = Depends(get_current_user),
    insights_service: InsightsService = Depends(get_insights_service)
):
    """Attach a sentiment result to a timer session"""
    result = insights_service.analyze_session(user_id, payload)
    sentiment_analyses.labels(label=sentiment_label_value(result["sentiment"]["label"])).inc()
    return result

@router.get("/stats", response_model=InsightStats)
def get_insight_stats(
    user_id: str = Depends(get_current_user),
    insights_service: InsightsService = Depends(get_insights_service)
):
    return insights_service.get_stats(user_id)
