from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, Field, ConfigDict, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_str_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


def _as_utc(value: Any) -> Any:
    # Motor returns naive datetimes unless tz_aware=True; stored naive values are UTC
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return value


class MongoRecord(BaseModel):
    """
    Read-side view of a stored document.

    `_id` is exposed as a plain string `id`; references to other documents
    are stored as strings already.
    """
    id: str = Field(default_factory=lambda: str(ObjectId()), alias="_id")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _as_str_id(value)
