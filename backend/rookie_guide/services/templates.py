from __future__ import annotations

import logging
from uuid import UUID

from .. import models, schemas
from ..errors import NotFoundError, ValidationError
from ..repositories import TemplateStore

logger = logging.getLogger(__name__)


class TemplateService:
    """Template creation and the read paths used for browsing."""

    def __init__(self, templates: TemplateStore):
        self.templates = templates

    def create_template(
        self, payload: schemas.TemplateCreate, created_by: UUID, *, is_official: bool = False
    ) -> models.Template:
        # parent_id is kept as a plain reference, it only has to exist
        if payload.parent_id and self.templates.find_by_id(payload.parent_id) is None:
            raise ValidationError(f"Parent template {payload.parent_id} does not exist")
        template = self.templates.create(payload, created_by, is_official=is_official)
        logger.info(
            "Created template %s (%s, %d steps)", template.id, template.location_tag, len(payload.steps)
        )
        return template

    def get_template(self, template_id: UUID) -> models.Template:
        template = self.templates.find_by_id(template_id)
        if template is None:
            raise NotFoundError(f"Template {template_id} not found")
        return template

    def search_templates(self, query: schemas.TemplateSearchQuery) -> list[models.Template]:
        return self.templates.search(query)

    def get_templates_by_location(self, location_tag: str) -> list[models.Template]:
        return self.templates.find_by_location(location_tag)

    def list_templates(self, page: int = 1, page_size: int = 20) -> list[models.Template]:
        return self.templates.list_all(page, page_size)
