from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.group import GroupMember


class CounterpartBalance(BaseModel):
    """One person in the 'you owe' / 'owes you' lists."""
    user_id: str
    name: str
    image_url: Optional[str] = None
    amount: float


class OweDetails(BaseModel):
    you_owe: List[CounterpartBalance] = Field(default_factory=list)
    you_are_owed_by: List[CounterpartBalance] = Field(default_factory=list)


class PairwiseBalanceResponse(BaseModel):
    """1-to-1 balances of the current user."""
    you_owe: float
    you_are_owed: float
    total_balance: float
    owe_details: OweDetails


class GroupBalanceResponse(BaseModel):
    """Group the current user belongs to, with their net position in it."""
    id: str
    name: str
    description: Optional[str] = None
    created_by: str
    members: List[GroupMember]
    balance: float


class YearTotalResponse(BaseModel):
    year: int
    total: float


class MonthlyTotal(BaseModel):
    month: datetime  # first instant of the month, UTC
    total: float
