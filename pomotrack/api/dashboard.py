from fastapi import APIRouter, Depends
from typing import List

from pomotrack.api.auth import get_current_user
from pomotrack.api.deps import get_dashboard_service
from pomotrack.schemas.dashboard import DashboardOverview, ScheduleItem, StreakSummary, WeeklyStats
from pomotrack.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/streak", response_model=StreakSummary)
def get_streak(
    user_id: str = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """Streak metrics from completed timer sessions"""
    return dashboard_service.get_streak_summary(user_id)

@router.get("/today-schedule", response_model=List[ScheduleItem])
def get_today_schedule(
    user_id: str = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    return dashboard_service.get_today_schedule(user_id)

@router.get("/stats", response_model=WeeklyStats)
def get_stats(
    user_id: str = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """Focus totals for the last seven days"""
    return dashboard_service.get_stats(user_id)

@router.get("/overview", response_model=DashboardOverview)
def get_overview(
    user_id: str = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """Streak, today's schedule and templates in one call"""
    return dashboard_service.get_overview(user_id)
