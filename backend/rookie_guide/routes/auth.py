from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from .. import schemas
from ..config import get_settings
from ..deps import get_user_service
from ..services.users import UserService

limiter = Limiter(key_func=get_remote_address)
testing = get_settings().testing


def rate_limit(limit: str):
    if testing:
        def wrapper(func):
            return func
        return wrapper
    return limiter.limit(limit)


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=schemas.AuthResponse)
@rate_limit("5/minute")
async def register(
    request: Request,
    user: schemas.UserCreate,
    service: UserService = Depends(get_user_service),
):
    return service.register(user)


@router.post("/login", response_model=schemas.AuthResponse)
@rate_limit("10/minute")
async def login(
    request: Request,
    user: schemas.LoginRequest,
    service: UserService = Depends(get_user_service),
):
    return service.login(user)
