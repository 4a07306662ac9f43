from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """A user record as stored in the ``users`` collection."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[ObjectId] = Field(default=None, alias="_id")
    name: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def new(cls, name: str, email: str) -> "User":
        """Build an unpersisted user stamped with the current time."""

        now = utcnow()
        return cls(name=name, email=email, created_at=now, updated_at=now)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "User":
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @field_validator("created_at", "updated_at")
    def _ensure_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # MongoDB returns naive datetimes unless the client is tz aware.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
