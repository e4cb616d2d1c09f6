from uuid import UUID

from fastapi import APIRouter, Depends

from .. import schemas
from ..auth import get_current_user_id
from ..deps import get_user_service
from ..services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=schemas.UserOut)
async def read_profile(
    user_id: UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(user_id)


@router.put("/me", response_model=schemas.UserOut)
async def update_profile(
    update: schemas.UserUpdate,
    user_id: UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return service.update_profile(user_id, update)
