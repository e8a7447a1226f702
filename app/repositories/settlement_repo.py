from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.settlement import Settlement


class SettlementRepository:
    """Settlement reads for the balance engine."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["settlements"]

    async def list_personal_settlements(self, user_id: str) -> List[Settlement]:
        """1-to-1 settlements (no group) the user paid or received."""
        docs = await self.collection.find({
            "group_id": None,
            "$or": [
                {"paid_by_user_id": user_id},
                {"received_by_user_id": user_id}
            ]
        }).sort("date", 1).to_list(None)
        return [Settlement(**doc) for doc in docs]

    async def list_group_settlements(self, group_id: str, user_id: str) -> List[Settlement]:
        """Settlements inside a group the user paid or received."""
        docs = await self.collection.find({
            "group_id": group_id,
            "$or": [
                {"paid_by_user_id": user_id},
                {"received_by_user_id": user_id}
            ]
        }).sort("date", 1).to_list(None)
        return [Settlement(**doc) for doc in docs]
