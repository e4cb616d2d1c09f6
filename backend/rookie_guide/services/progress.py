"""Checklist progress computation.

Pure functions over the ``progress_status`` document of a checklist. Nothing
here touches the database: repositories call :func:`load_progress` /
:func:`dump_progress` at the storage boundary and services call
:func:`compute_progress` to derive the statistics returned to clients.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .. import schemas
from ..errors import InternalError, NotFoundError

_progress_adapter = TypeAdapter(list[schemas.StepProgress])
_steps_adapter = TypeAdapter(list[schemas.TemplateStep])


def load_progress(raw: Any) -> list[schemas.StepProgress]:
    """Parse a stored progress document, raising ``InternalError`` when it is corrupt."""

    try:
        return _progress_adapter.validate_python(raw or [])
    except PydanticValidationError as exc:
        raise InternalError(f"Stored checklist progress is malformed: {exc.error_count()} errors") from exc


def dump_progress(steps: Iterable[schemas.StepProgress]) -> list[dict[str, Any]]:
    return [step.model_dump(mode="json") for step in steps]


def load_steps(raw: Any) -> list[schemas.TemplateStep]:
    """Parse stored template steps and return them in presentation order."""

    try:
        steps = _steps_adapter.validate_python(raw or [])
    except PydanticValidationError as exc:
        raise InternalError(f"Stored template steps are malformed: {exc.error_count()} errors") from exc
    return sorted(steps, key=lambda step: step.order)


def initial_progress(step_count: int) -> list[schemas.StepProgress]:
    """Fresh progress for a fork: one incomplete entry per step, indexed 0..N-1."""

    return [
        schemas.StepProgress(step_index=index, completed=False, completed_at=None)
        for index in range(step_count)
    ]


def compute_progress(steps: Sequence[schemas.StepProgress]) -> schemas.ChecklistProgress:
    """Derive completion statistics, keeping ``steps`` in the order given.

    An empty checklist reports ``0.0`` percent instead of dividing by zero.
    """

    total = len(steps)
    completed = sum(1 for step in steps if step.completed)
    percentage = (completed / total) * 100.0 if total > 0 else 0.0
    return schemas.ChecklistProgress(
        steps=list(steps),
        total_steps=total,
        completed_steps=completed,
        progress_percentage=percentage,
    )


def apply_step_update(
    steps: Sequence[schemas.StepProgress],
    step_index: int,
    completed: bool,
    now: datetime,
) -> list[schemas.StepProgress]:
    """Return a new progress list with one entry toggled.

    Completing a step always stamps ``now``, including when it was already
    complete; clearing it always drops the timestamp.
    """

    updated = [step.model_copy() for step in steps]
    target = next((step for step in updated if step.step_index == step_index), None)
    if target is None:
        raise NotFoundError(f"Step {step_index} not found")
    target.completed = completed
    target.completed_at = now if completed else None
    return updated
