from uuid import UUID

from fastapi import APIRouter, Depends

from .. import schemas
from ..auth import get_current_user_id
from ..deps import get_checklist_service
from ..services.checklists import ChecklistService

router = APIRouter(prefix="/api/checklists", tags=["checklists"])


@router.get("", response_model=list[schemas.UserChecklistResponse])
async def list_checklists(
    user_id: UUID = Depends(get_current_user_id),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.get_user_checklists(user_id)


@router.post("", response_model=schemas.UserChecklistResponse)
async def fork_template(
    payload: schemas.ForkTemplateRequest,
    user_id: UUID = Depends(get_current_user_id),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.fork_template(user_id, payload.template_id)


@router.get("/{checklist_id}", response_model=schemas.UserChecklistResponse)
async def get_checklist(
    checklist_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.get_checklist(checklist_id)


@router.put("/{checklist_id}/steps", response_model=schemas.UserChecklistResponse)
async def update_step(
    checklist_id: UUID,
    payload: schemas.UpdateStepRequest,
    user_id: UUID = Depends(get_current_user_id),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.update_step(checklist_id, payload.step_index, payload.completed)
