from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import DatabaseError

logger = logging.getLogger(__name__)


@contextmanager
def storage_call(db: Session, action: str) -> Iterator[None]:
    """Roll back and surface driver failures as ``DatabaseError``."""

    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s failed: %s", action, exc.__class__.__name__)
        raise DatabaseError(f"{action} failed ({exc.__class__.__name__})") from exc
