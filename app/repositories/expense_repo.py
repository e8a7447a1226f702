from datetime import datetime
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.expense import Expense


class ExpenseRepository:
    """Expense reads for the balance engine."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["expenses"]

    async def list_personal_expenses(self, user_id: str) -> List[Expense]:
        """1-to-1 expenses (no group) the user paid or has a split in."""
        docs = await self.collection.find({
            "group_id": None,
            "$or": [
                {"paid_by_user_id": user_id},
                {"splits.user_id": user_id}
            ]
        }).sort("date", 1).to_list(None)
        return [Expense(**doc) for doc in docs]

    async def list_group_expenses(self, group_id: str) -> List[Expense]:
        """All expenses recorded in a group."""
        docs = await self.collection.find({
            "group_id": group_id
        }).sort("date", 1).to_list(None)
        return [Expense(**doc) for doc in docs]

    async def list_user_expenses_between(
        self, user_id: str, start: datetime, end: datetime
    ) -> List[Expense]:
        """Expenses in [start, end) the user paid or has a split in, any group."""
        docs = await self.collection.find({
            "date": {"$gte": start, "$lt": end},
            "$or": [
                {"paid_by_user_id": user_id},
                {"splits.user_id": user_id}
            ]
        }).sort("date", 1).to_list(None)
        return [Expense(**doc) for doc in docs]
