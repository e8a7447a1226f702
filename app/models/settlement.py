from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.base import MongoRecord, _as_utc, _utcnow

class Settlement(MongoRecord):
    """Direct repayment from one party to another, optionally inside a group."""
    paid_by_user_id: str
    received_by_user_id: str
    amount: float
    group_id: Optional[str] = None
    note: Optional[str] = None
    date: datetime = Field(default_factory=_utcnow)

    @field_validator("date")
    @classmethod
    def _coerce_date(cls, value):
        return _as_utc(value)

    def involves(self, user_id: str) -> bool:
        return user_id in (self.paid_by_user_id, self.received_by_user_id)

    def counterparty_of(self, user_id: str) -> str:
        if self.paid_by_user_id == user_id:
            return self.received_by_user_id
        return self.paid_by_user_id

    def applies_to(self, user_id: str, group_id: Optional[str] = None) -> bool:
        """
        Settlement counts toward the subject's balance in this scope:
        both group ids absent for 1-to-1, or equal for a group.
        """
        return self.group_id == group_id and self.involves(user_id)
