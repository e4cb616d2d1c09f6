"""
Template store: read-mostly lookups plus the one-shot create path.
"""

from __future__ import annotations

from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .. import models, schemas
from .base import storage_call


class TemplateStore(Protocol):
    """Interface for template persistence."""

    def create(
        self, payload: schemas.TemplateCreate, created_by: UUID, *, is_official: bool = False
    ) -> models.Template:
        ...

    def find_by_id(self, template_id: UUID) -> Optional[models.Template]:
        ...

    def search(self, query: schemas.TemplateSearchQuery) -> list[models.Template]:
        ...

    def find_by_location(self, location_tag: str) -> list[models.Template]:
        ...

    def list_all(self, page: int, page_size: int) -> list[models.Template]:
        ...


def _location_filter(location_tag: str):
    # a region query always includes the universal templates
    return or_(
        models.Template.location_tag == location_tag,
        models.Template.location_tag == models.UNIVERSAL_LOCATION_TAG,
    )


def _escape_like(keyword: str) -> str:
    # keywords are matched literally, not as LIKE patterns
    return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlTemplateStore:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self, payload: schemas.TemplateCreate, created_by: UUID, *, is_official: bool = False
    ) -> models.Template:
        now = models.utcnow()
        template = models.Template(
            title=payload.title,
            description=payload.description,
            location_tag=payload.location_tag,
            steps=[step.model_dump(mode="json") for step in payload.steps],
            parent_id=payload.parent_id,
            created_by=created_by,
            is_official=is_official,
            created_at=now,
            updated_at=now,
        )
        with storage_call(self.db, "create template"):
            self.db.add(template)
            self.db.commit()
            self.db.refresh(template)
        return template

    def find_by_id(self, template_id: UUID) -> Optional[models.Template]:
        with storage_call(self.db, "load template"):
            return self.db.get(models.Template, template_id)

    def find_by_title(self, title: str, location_tag: str) -> Optional[models.Template]:
        with storage_call(self.db, "load template"):
            return (
                self.db.query(models.Template)
                .filter(
                    models.Template.title == title,
                    models.Template.location_tag == location_tag,
                )
                .first()
            )

    def search(self, query: schemas.TemplateSearchQuery) -> list[models.Template]:
        q = self.db.query(models.Template)
        if query.keyword:
            pattern = f"%{_escape_like(query.keyword)}%"
            q = q.filter(
                or_(
                    models.Template.title.ilike(pattern, escape="\\"),
                    models.Template.description.ilike(pattern, escape="\\"),
                )
            )
        if query.location_tag:
            q = q.filter(_location_filter(query.location_tag))
        with storage_call(self.db, "search templates"):
            return (
                q.order_by(models.Template.created_at.desc())
                .offset((query.page - 1) * query.page_size)
                .limit(query.page_size)
                .all()
            )

    def find_by_location(self, location_tag: str) -> list[models.Template]:
        with storage_call(self.db, "list templates by location"):
            return (
                self.db.query(models.Template)
                .filter(_location_filter(location_tag))
                .order_by(models.Template.created_at.desc())
                .all()
            )

    def list_all(self, page: int, page_size: int) -> list[models.Template]:
        with storage_call(self.db, "list templates"):
            return (
                self.db.query(models.Template)
                .order_by(models.Template.created_at.desc())
                .offset((page - 1) * page_size)
                .limit(page_size)
                .all()
            )
