from fastapi import APIRouter, Depends, Query, Response, status
from typing import List, Optional
from datetime import datetime

from pomotrack.api.auth import get_current_user
from pomotrack.api.deps import get_schedule_service
from pomotrack.schemas.schedule import ScheduleCreate, ScheduleResponse, ScheduleUpdate
from pomotrack.services.schedule_service import ScheduleService
from pomotrack.utils.clock import to_naive_utc

router = APIRouter(prefix="/schedule", tags=["schedule"])

@router.get("", response_model=List[ScheduleResponse])
def list_schedule(
    start: Optional[datetime] = Query(default=None, alias="from"),
    end: Optional[datetime] = Query(default=None, alias="to"),
    user_id: str = Depends(get_current_user),
    schedule_service: ScheduleService = Depends(get_schedule_service)
):
    """Scheduled sessions, optionally bounded by from/to"""
    return schedule_service.list_entries(
        user_id,
        to_naive_utc(start) if start else None,
        to_naive_utc(end) if end else None,
    )

@router.post("", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_schedule_entry(
    payload: ScheduleCreate,
    user_id: str = Depends(get_current_user),
    schedule_service: ScheduleService = Depends(get_schedule_service)
):
    return schedule_service.create_entry(user_id, payload)

@router.put("/{entry_id}", response_model=ScheduleResponse)
def update_schedule_entry(
    entry_id: int,
    payload: ScheduleUpdate,
    user_id: str = Depends(get_current_user),
    schedule_service: ScheduleService = Depends(get_schedule_service)
):
    return schedule_service.update_entry(user_id, entry_id, payload)

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule_entry(
    entry_id: int,
    user_id: str = Depends(get_current_user),
    schedule_service: ScheduleService = Depends(get_schedule_service)
):
    schedule_service.delete_entry(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
