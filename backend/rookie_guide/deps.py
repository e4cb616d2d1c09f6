"""
Per-request wiring of stores and services.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from .auth import CredentialService, get_credential_service
from .database import get_db
from .repositories import SqlChecklistStore, SqlTemplateStore, SqlUserStore
from .services.checklists import ChecklistService
from .services.templates import TemplateService
from .services.users import UserService


def get_user_service(
    db: Session = Depends(get_db),
    credentials: CredentialService = Depends(get_credential_service),
) -> UserService:
    return UserService(SqlUserStore(db), credentials)


def get_template_service(db: Session = Depends(get_db)) -> TemplateService:
    return TemplateService(SqlTemplateStore(db))


def get_checklist_service(db: Session = Depends(get_db)) -> ChecklistService:
    return ChecklistService(SqlChecklistStore(db), SqlTemplateStore(db))
