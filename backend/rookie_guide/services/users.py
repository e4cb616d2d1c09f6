from __future__ import annotations

import logging
from uuid import UUID

from .. import schemas
from ..auth import CredentialService
from ..errors import AuthError, NotFoundError, ValidationError
from ..repositories import UserStore

logger = logging.getLogger(__name__)


class UserService:
    """Registration, login and profile maintenance."""

    def __init__(self, users: UserStore, credentials: CredentialService):
        self.users = users
        self.credentials = credentials

    def _auth_response(self, user) -> schemas.AuthResponse:
        return schemas.AuthResponse(
            user=schemas.UserOut.model_validate(user),
            access_token=self.credentials.create_access_token(user.id),
        )

    def register(self, payload: schemas.UserCreate) -> schemas.AuthResponse:
        if not payload.phone and not payload.email:
            raise ValidationError("Phone or email required")
        if payload.phone and self.users.find_by_phone(payload.phone):
            raise ValidationError("Phone already registered")
        if payload.email and self.users.find_by_email(payload.email):
            raise ValidationError("Email already registered")
        user = self.users.create(payload, self.credentials.hash_password(payload.password))
        logger.info("Registered user %s", user.id)
        return self._auth_response(user)

    def login(self, payload: schemas.LoginRequest) -> schemas.AuthResponse:
        if payload.phone:
            user = self.users.find_by_phone(payload.phone)
        elif payload.email:
            user = self.users.find_by_email(payload.email)
        else:
            raise ValidationError("Phone or email required")
        if user is None or not self.credentials.verify_password(payload.password, user.password_hash):
            logger.warning("Rejected login for %s", payload.phone or payload.email)
            raise AuthError("Invalid credentials")
        return self._auth_response(user)

    def get_user(self, user_id: UUID) -> schemas.UserOut:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return schemas.UserOut.model_validate(user)

    def update_profile(self, user_id: UUID, update: schemas.UserUpdate) -> schemas.UserOut:
        user = self.users.update_profile(user_id, update)
        return schemas.UserOut.model_validate(user)
