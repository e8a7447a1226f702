from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.base import MongoRecord, _as_utc, _utcnow

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"


class GroupMember(BaseModel):
    user_id: str
    role: Literal["admin", "member"] = ROLE_MEMBER
    joined_at: datetime = Field(default_factory=_utcnow)

    @field_validator("joined_at")
    @classmethod
    def _coerce_joined_at(cls, value):
        return _as_utc(value)


class Group(MongoRecord):
    name: str
    description: Optional[str] = ""
    created_by: str
    members: List[GroupMember] = Field(default_factory=list)

    def has_member(self, user_id: str) -> bool:
        return any(member.user_id == user_id for member in self.members)

    @property
    def member_count(self) -> int:
        return len(self.members)
