"""Error taxonomy shared by repositories, services and routes.

Every expected failure of a core operation is raised as one of the
``AppError`` subclasses below; the ``kind`` attribute lets callers tell them
apart without string matching. Routes never translate these by hand: the
handlers registered in :func:`register_exception_handlers` render them.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    kind = "app_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    kind = "not_found"
    status_code = 404


class ValidationError(AppError):
    kind = "validation_error"
    status_code = 400


class AuthError(AppError):
    kind = "auth_error"
    status_code = 401


class InternalError(AppError):
    kind = "internal_error"
    status_code = 500


class DatabaseError(AppError):
    kind = "database_error"
    status_code = 500


def _render(exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.exception("%s on %s %s", exc.kind, request.method, request.url.path, exc_info=exc)
    return _render(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # pydantic error contexts may hold exception objects, keep only the
    # serialisable parts
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": errors, "kind": ValidationError.kind},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
