from fastapi import APIRouter, Depends, Response, status
from typing import List

from pomotrack.api.auth import get_current_user
from pomotrack.api.deps import get_template_service
from pomotrack.schemas.templates import TemplateCreate, TemplateResponse, TemplateUpdate
from pomotrack.services.template_service import TemplateService

router = APIRouter(prefix="/templates", tags=["templates"])

@router.get("", response_model=List[TemplateResponse])
def list_templates(
    user_id: str = Depends(get_current_user),
    template_service: TemplateService = Depends(get_template_service)
):
    return template_service.list_templates(user_id)

@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: TemplateCreate,
    user_id: str = Depends(get_current_user),
    template_service: TemplateService = Depends(get_template_service)
):
    return template_service.create_template(user_id, payload)

@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(
    template_id: int,
    user_id: str = Depends(get_current_user),
    template_service: TemplateService = Depends(get_template_service)
):
    return template_service.get_template(user_id, template_id)

@router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: int,
    payload: TemplateUpdate,
    user_id: str = Depends(get_current_user),
    template_service: TemplateService = Depends(get_template_service)
):
    return template_service.update_template(user_id, template_id, payload)

@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: int,
    user_id: str = Depends(get_current_user),
    template_service: TemplateService = Depends(get_template_service)
):
    """Delete a template and its schedule entries; timer history is kept"""
    template_service.delete_template(user_id, template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
