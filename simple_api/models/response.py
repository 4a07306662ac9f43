"""Request and response data model definitions."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from .user import User


class CreateUserRequest(BaseModel):
    name: str
    email: str

    @field_validator("name", "email")
    def _encodable(cls, value: str) -> str:
        # Lone surrogates survive JSON parsing but cannot be stored as BSON strings.
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError("must be valid UTF-8 text") from exc
        return value


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id) if user.id is not None else "",
            name=user.name,
            email=user.email,
            created_at=user.created_at.isoformat(),
        )


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str


class ErrorResponse(BaseModel):
    error: str
    message: str
