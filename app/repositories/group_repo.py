from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.group import Group


class GroupRepository:
    """Group reads (membership is fixed at query time)."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["groups"]

    async def list_groups_for_member(self, user_id: str) -> List[Group]:
        """Groups with the user in their member list."""
        docs = await self.collection.find({
            "members.user_id": user_id
        }).to_list(None)
        groups = [Group(**doc) for doc in docs]
        return [group for group in groups if group.has_member(user_id)]
