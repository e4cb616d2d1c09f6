from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from .. import schemas
from ..auth import get_current_user_id
from ..deps import get_template_service
from ..services.templates import TemplateService

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=list[schemas.TemplateOut])
async def list_templates(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    service: TemplateService = Depends(get_template_service),
):
    return service.list_templates(page, page_size)


@router.get("/search", response_model=list[schemas.TemplateOut])
async def search_templates(
    keyword: Optional[str] = None,
    location_tag: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    service: TemplateService = Depends(get_template_service),
):
    query = schemas.TemplateSearchQuery(
        keyword=keyword, location_tag=location_tag, page=page, page_size=page_size
    )
    return service.search_templates(query)


@router.get("/city/{location_tag}", response_model=list[schemas.TemplateOut])
async def list_templates_by_location(
    location_tag: str,
    service: TemplateService = Depends(get_template_service),
):
    return service.get_templates_by_location(location_tag)


@router.get("/{template_id}", response_model=schemas.TemplateOut)
async def get_template(
    template_id: UUID,
    service: TemplateService = Depends(get_template_service),
):
    return service.get_template(template_id)


@router.post("", response_model=schemas.TemplateOut)
async def create_template(
    template: schemas.TemplateCreate,
    user_id: UUID = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    return service.create_template(template, user_id)
