"""
Expense model - a monetary event split among participants.

Design principles:
- No group_id means a personal (1-to-1) expense
- splits[].amount should add up to amount
- A split flagged paid is already settled and never counts as outstanding
- Read-only for the ledger engine
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from app.models.base import MongoRecord, _as_utc, _utcnow


class Split(BaseModel):
    """One participant's share of an expense."""
    user_id: str
    amount: float
    paid: bool = False

    def is_outstanding_for(self, user_id: str) -> bool:
        """True if this share is still owed by `user_id`."""
        return self.user_id == user_id and not self.paid


class Expense(MongoRecord):
    amount: float
    description: str = ""
    category: Optional[str] = None
    date: datetime = Field(default_factory=_utcnow)
    paid_by_user_id: str
    group_id: Optional[str] = None
    splits: List[Split] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def _coerce_date(cls, value):
        return _as_utc(value)

    @property
    def is_personal(self) -> bool:
        return self.group_id is None

    def split_for(self, user_id: str) -> Optional[Split]:
        for split in self.splits:
            if split.user_id == user_id:
                return split
        return None

    def involves(self, user_id: str) -> bool:
        """Subject paid for the expense or has a share in it."""
        return self.paid_by_user_id == user_id or self.split_for(user_id) is not None
