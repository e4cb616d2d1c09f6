"""
Checklist store: fork persistence and the whole-document progress rewrite.
"""

from __future__ import annotations

from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy.orm import Session

from .. import models
from ..errors import AppError, NotFoundError
from ..services import progress as progress_engine
from .base import storage_call


class ChecklistStore(Protocol):
    """Interface for checklist persistence."""

    def create_from_template(self, user_id: UUID, template: models.Template) -> models.UserChecklist:
        ...

    def find_by_id(self, checklist_id: UUID) -> Optional[models.UserChecklist]:
        ...

    def find_by_user(self, user_id: UUID) -> list[models.UserChecklist]:
        ...

    def update_step_status(
        self, checklist_id: UUID, step_index: int, completed: bool
    ) -> models.UserChecklist:
        ...


class SqlChecklistStore:
    def __init__(self, db: Session):
        self.db = db

    def create_from_template(self, user_id: UUID, template: models.Template) -> models.UserChecklist:
        steps = progress_engine.load_steps(template.steps)
        now = models.utcnow()
        checklist = models.UserChecklist(
            user_id=user_id,
            source_template_id=template.id,
            title=template.title,
            progress_status=progress_engine.dump_progress(
                progress_engine.initial_progress(len(steps))
            ),
            created_at=now,
            updated_at=now,
        )
        with storage_call(self.db, "create checklist"):
            self.db.add(checklist)
            self.db.commit()
            self.db.refresh(checklist)
        return checklist

    def find_by_id(self, checklist_id: UUID) -> Optional[models.UserChecklist]:
        with storage_call(self.db, "load checklist"):
            return self.db.get(models.UserChecklist, checklist_id)

    def find_by_user(self, user_id: UUID) -> list[models.UserChecklist]:
        with storage_call(self.db, "list checklists"):
            return (
                self.db.query(models.UserChecklist)
                .filter(models.UserChecklist.user_id == user_id)
                .order_by(models.UserChecklist.created_at.desc())
                .all()
            )

    def update_step_status(
        self, checklist_id: UUID, step_index: int, completed: bool
    ) -> models.UserChecklist:
        """Toggle one step inside a single transaction.

        The row is read with ``FOR UPDATE`` so concurrent updates to the same
        checklist serialize; the progress document is then written back whole.
        """

        with storage_call(self.db, "update checklist step"):
            checklist = (
                self.db.query(models.UserChecklist)
                .filter(models.UserChecklist.id == checklist_id)
                .with_for_update()
                .first()
            )
            if checklist is None:
                self.db.rollback()
                raise NotFoundError(f"Checklist {checklist_id} not found")
            try:
                current = progress_engine.load_progress(checklist.progress_status)
                now = models.utcnow()
                updated = progress_engine.apply_step_update(current, step_index, completed, now)
            except AppError:
                self.db.rollback()
                raise
            checklist.progress_status = progress_engine.dump_progress(updated)
            checklist.updated_at = now
            self.db.commit()
            self.db.refresh(checklist)
        return checklist
