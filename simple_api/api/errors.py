"""Translate framework rejections and application errors into the JSON error shape."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from simple_api.core.exceptions import (
    ApplicationError,
    BadRequestError,
    MethodNotAllowedError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _render(exc: ApplicationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def translate_http_exception(exc: StarletteHTTPException) -> ApplicationError:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return NotFoundError("Endpoint not found")
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return MethodNotAllowedError("Method not allowed")
    return BadRequestError(f"Request error: {exc.detail}")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApplicationError)
    async def handle_application_error(_: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.debug("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
        return _render(ValidationError("Invalid JSON format"))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_: Request, exc: StarletteHTTPException):
        return _render(translate_http_exception(exc))
