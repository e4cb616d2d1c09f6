"""CLI utilities for bootstrapping the template catalogue."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..data.loaders import OFFICIAL_TEMPLATES_PATH, load_json
from ..database import Base, SessionLocal, engine
from ..errors import AppError
from ..repositories import SqlTemplateStore, SqlUserStore
from ..services.templates import TemplateService

logger = logging.getLogger(__name__)

app = typer.Typer(help="Rookie Guide maintenance commands")


def load_definitions(path: Path) -> list[schemas.TemplateCreate]:
    """Parse and validate every template definition before anything is written."""

    try:
        raw = load_json(path)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON list of templates")
    definitions = []
    for position, entry in enumerate(raw):
        try:
            definitions.append(schemas.TemplateCreate.model_validate(entry))
        except PydanticValidationError as exc:
            raise ValueError(f"Template #{position} is invalid: {exc.errors()[0]['msg']}") from exc
    return definitions


def _find_owner(session: Session, owner_email: Optional[str], owner_phone: Optional[str]) -> models.User:
    users = SqlUserStore(session)
    if owner_phone:
        owner = users.find_by_phone(owner_phone)
    elif owner_email:
        owner = users.find_by_email(owner_email)
    else:
        raise ValueError("An owner email or phone is required")
    if owner is None:
        raise ValueError("Owner does not correspond to a known user")
    return owner


def seed_templates(
    path: Path,
    *,
    owner_email: Optional[str] = None,
    owner_phone: Optional[str] = None,
    session_factory: Callable[[], Session] = SessionLocal,
) -> dict[str, int]:
    """Insert official templates, skipping titles already present for the same tag."""

    definitions = load_definitions(path)
    session = session_factory()
    try:
        owner = _find_owner(session, owner_email, owner_phone)
        store = SqlTemplateStore(session)
        service = TemplateService(store)
        created = skipped = 0
        for definition in definitions:
            if store.find_by_title(definition.title, definition.location_tag):
                skipped += 1
                continue
            service.create_template(definition, owner.id, is_official=True)
            created += 1
        logger.info("Seeded %d official templates (%d skipped)", created, skipped)
        return {"created": created, "skipped": skipped}
    finally:
        session.close()


@app.command("init-db")
def init_db_command() -> None:
    """Create all tables on the configured database."""

    Base.metadata.create_all(bind=engine)
    typer.echo(json.dumps({"database": engine.url.get_backend_name(), "status": "ready"}))


@app.command("seed-templates")
def seed_templates_command(
    path: Path = typer.Argument(
        OFFICIAL_TEMPLATES_PATH, exists=True, dir_okay=False, help="JSON file of template definitions"
    ),
    owner_email: str = typer.Option(None, help="Email of the user owning the seeded templates"),
    owner_phone: str = typer.Option(None, help="Phone of the user owning the seeded templates"),
) -> None:
    """CLI wrapper for :func:`seed_templates`."""

    try:
        summary = seed_templates(path, owner_email=owner_email, owner_phone=owner_phone)
    except (ValueError, AppError) as exc:
        raise typer.BadParameter(str(exc))
    typer.echo(json.dumps(summary))
