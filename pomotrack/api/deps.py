from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories.dashboard_repository import DashboardRepository
from ..repositories.insights_repository import InsightsRepository
from ..repositories.schedule_repository import ScheduleRepository
from ..repositories.template_repository import TemplateRepository
from ..repositories.timer_repository import TimerRepository
from ..services.dashboard_service import DashboardService
from ..services.insights_service import InsightsService
from ..services.schedule_service import ScheduleService
from ..services.sentiment_service import SentimentClassifier, get_sentiment_classifier
from ..services.template_service import TemplateService
from ..services.timer_service import TimerService
from ..utils.clock import Clock, system_clock


def get_clock() -> Clock:
    return system_clock


def get_classifier() -> SentimentClassifier | None:
    return get_sentiment_classifier()


def get_timer_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> TimerService:
    return TimerService(TimerRepository(db), clock)


def get_dashboard_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> DashboardService:
    return DashboardService(DashboardRepository(db), clock)


def get_insights_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    classifier: SentimentClassifier | None = Depends(get_classifier),
) -> InsightsService:
    return InsightsService(InsightsRepository(db), clock, classifier)


def get_template_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> TemplateService:
    return TemplateService(TemplateRepository(db), clock)


def get_schedule_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> ScheduleService:
    return ScheduleService(ScheduleRepository(db), clock)
