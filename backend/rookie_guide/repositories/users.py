from __future__ import annotations

from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy.orm import Session

from .. import models, schemas
from ..errors import NotFoundError
from .base import storage_call


class UserStore(Protocol):
    """Interface for user persistence."""

    def create(self, payload: schemas.UserCreate, password_hash: str) -> models.User:
        ...

    def find_by_id(self, user_id: UUID) -> Optional[models.User]:
        ...

    def find_by_phone(self, phone: str) -> Optional[models.User]:
        ...

    def find_by_email(self, email: str) -> Optional[models.User]:
        ...

    def update_profile(self, user_id: UUID, update: schemas.UserUpdate) -> models.User:
        ...


class SqlUserStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, payload: schemas.UserCreate, password_hash: str) -> models.User:
        now = models.utcnow()
        user = models.User(
            phone=payload.phone,
            email=payload.email,
            password_hash=password_hash,
            nickname=payload.nickname,
            created_at=now,
            updated_at=now,
        )
        with storage_call(self.db, "create user"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def find_by_id(self, user_id: UUID) -> Optional[models.User]:
        with storage_call(self.db, "load user"):
            return self.db.get(models.User, user_id)

    def find_by_phone(self, phone: str) -> Optional[models.User]:
        with storage_call(self.db, "load user"):
            return self.db.query(models.User).filter(models.User.phone == phone).first()

    def find_by_email(self, email: str) -> Optional[models.User]:
        with storage_call(self.db, "load user"):
            return self.db.query(models.User).filter(models.User.email == email).first()

    def update_profile(self, user_id: UUID, update: schemas.UserUpdate) -> models.User:
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        for key, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(user, key, value)
        user.updated_at = models.utcnow()
        with storage_call(self.db, "update user"):
            self.db.commit()
            self.db.refresh(user)
        return user
