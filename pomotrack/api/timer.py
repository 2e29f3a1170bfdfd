from fastapi import APIRouter, Depends, status
from typing import List, Optional

from pomotrack.api.auth import get_current_user
from pomotrack.api.deps import get_timer_service
from pomotrack.api.metrics import timer_phase_starts, timer_transitions
from pomotrack.schemas.timer import NotesUpdate, TimerComplete, TimerSessionResponse, TimerStart
from pomotrack.services.timer_service import TimerService

router = APIRouter(
    prefix="/timer",
    tags=["timer"],
    responses={404: {"description": "Not found"}}
)

@router.get("/active", response_model=Optional[TimerSessionResponse])
def get_active_timer(
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    """Get the user's active timer, or null when idle"""
    return timer_service.get_active_session(user_id)

@router.post("/start", response_model=TimerSessionResponse, status_code=status.HTTP_201_CREATED)
def start_timer(
    payload: TimerStart,
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    """Start a phase; also used for phase transitions within a group"""
    session = timer_service.start_timer(user_id, payload)
    timer_transitions.labels(action="start").inc()
    timer_phase_starts.labels(phase=session.phase).inc()
    return session

@router.post("/pause", response_model=TimerSessionResponse)
def pause_timer(
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    session = timer_service.pause_timer(user_id)
    timer_transitions.labels(action="pause").inc()
    return session

@router.post("/resume", response_model=TimerSessionResponse)
def resume_timer(
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    session = timer_service.resume_timer(user_id)
    timer_transitions.labels(action="resume").inc()
    return session

@router.post("/stop", response_model=TimerSessionResponse)
def stop_timer(
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    """End the active timer early"""
    session = timer_service.stop_timer(user_id)
    timer_transitions.labels(action="stop").inc()
    return session

@router.post("/complete", response_model=TimerSessionResponse)
def complete_timer(
    payload: TimerComplete,
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    """Mark a specific timer session as finished on schedule"""
    session = timer_service.complete_timer(user_id, payload.timer_id)
    timer_transitions.labels(action="complete").inc()
    return session

@router.patch("/{timer_id}/notes", response_model=TimerSessionResponse)
def update_notes(
    timer_id: str,
    payload: NotesUpdate,
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    return timer_service.update_notes(user_id, timer_id, payload.notes)

@router.get("/history", response_model=List[TimerSessionResponse])
def get_history(
    limit: Optional[str] = None,
    user_id: str = Depends(get_current_user),
    timer_service: TimerService = Depends(get_timer_service)
):
    """Most recent timer sessions; limit defaults to 50 and is capped at 200"""
    return timer_service.get_history(user_id, limit)
