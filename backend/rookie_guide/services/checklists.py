"""Fork and step-update flows for personal checklists.

A checklist is a snapshot: forking copies the template title and creates one
progress entry per template step, after which the template and the checklist
never influence each other again. Every response carries statistics freshly
derived from the stored progress, nothing derived is persisted.
"""

from __future__ import annotations

import logging
from uuid import UUID

from .. import models, schemas
from ..errors import NotFoundError
from ..repositories import ChecklistStore, TemplateStore
from . import progress as progress_engine

logger = logging.getLogger(__name__)


def build_response(checklist: models.UserChecklist) -> schemas.UserChecklistResponse:
    steps = progress_engine.load_progress(checklist.progress_status)
    return schemas.UserChecklistResponse(
        checklist=schemas.ChecklistOut(
            id=checklist.id,
            user_id=checklist.user_id,
            source_template_id=checklist.source_template_id,
            title=checklist.title,
            progress_status=steps,
            created_at=checklist.created_at,
            updated_at=checklist.updated_at,
        ),
        progress=progress_engine.compute_progress(steps),
    )


class ChecklistService:
    def __init__(self, checklists: ChecklistStore, templates: TemplateStore):
        self.checklists = checklists
        self.templates = templates

    def fork_template(self, user_id: UUID, template_id: UUID) -> schemas.UserChecklistResponse:
        template = self.templates.find_by_id(template_id)
        if template is None:
            raise NotFoundError(f"Template {template_id} not found")
        checklist = self.checklists.create_from_template(user_id, template)
        logger.info("User %s forked template %s into checklist %s", user_id, template_id, checklist.id)
        return build_response(checklist)

    def get_checklist(self, checklist_id: UUID) -> schemas.UserChecklistResponse:
        checklist = self.checklists.find_by_id(checklist_id)
        if checklist is None:
            raise NotFoundError(f"Checklist {checklist_id} not found")
        return build_response(checklist)

    def get_user_checklists(self, user_id: UUID) -> list[schemas.UserChecklistResponse]:
        return [build_response(checklist) for checklist in self.checklists.find_by_user(user_id)]

    def update_step(
        self, checklist_id: UUID, step_index: int, completed: bool
    ) -> schemas.UserChecklistResponse:
        checklist = self.checklists.update_step_status(checklist_id, step_index, completed)
        logger.info("Checklist %s step %d set completed=%s", checklist_id, step_index, completed)
        return build_response(checklist)
