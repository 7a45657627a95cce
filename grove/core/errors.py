"""Typed service errors and the handlers that turn them into HTTP responses."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for errors raised by services. Carries an HTTP status and safe message."""

    status_code: int = 500

    def __init__(self, detail: str, **extra: Any) -> None:
        super().__init__(detail)
        self.detail = detail
        self.extra = extra


class NotFoundError(AppError):
    """Entity is absent or not owned by the caller."""

    status_code = 404


class BadRequestError(AppError):
    """Business-rule violation (bad cross-references, empty prompt, ...)."""

    status_code = 400


class ConflictError(BadRequestError):
    """State conflict, e.g. a second active session for the same user."""


class UnauthorizedError(AppError):
    status_code = 401


class UpstreamError(AppError):
    """The completion API failed; the gateway already contained the raw error."""

    status_code = 502


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, **exc.extra},
        headers=headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
