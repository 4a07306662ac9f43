"""Error kinds surfaced to API clients."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import status


class ApplicationError(Exception):
    """Base application error with HTTP semantics.

    Every subclass fixes a ``code`` and ``status_code`` pair; the message is
    the only per-instance detail.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "bad_request"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class InvalidIdError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_id"


class NotFoundError(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class MethodNotAllowedError(ApplicationError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    code = "method_not_allowed"


class DatabaseError(ApplicationError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "database_error"


class BadRequestError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "bad_request"
