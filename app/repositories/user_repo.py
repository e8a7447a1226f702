from typing import Dict, Iterable, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from app.models.user import UserInDB


def _id_keys(user_id) -> List:
    """
    `_id` values a user id may be stored under.

    Users created by the app have ObjectId keys; users imported from the
    identity provider keep its string id as `_id`. A 24-hex id matches
    either form.
    """
    if not isinstance(user_id, str) or not user_id:
        return []
    if ObjectId.is_valid(user_id):
        return [ObjectId(user_id), user_id]
    return [user_id]


class UserRepository:
    """User directory lookups (read-only)."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def get_user_by_id(self, user_id: str) -> UserInDB | None:
        """Get user by ID."""
        keys = _id_keys(user_id)
        if not keys:
            return None

        user = await self.collection.find_one({"_id": {"$in": keys}})
        if user:
            return UserInDB(**user)
        return None

    async def get_users_by_ids(self, user_ids: Iterable[str]) -> Dict[str, UserInDB]:
        """
        Resolve many ids in one query.

        Ids that are empty or no longer exist are simply absent from the
        returned mapping.
        """
        keys = [key for uid in set(user_ids) for key in _id_keys(uid)]
        if not keys:
            return {}

        docs = await self.collection.find({"_id": {"$in": keys}}).to_list(None)
        users = [UserInDB(**doc) for doc in docs]
        return {user.id: user for user in users}
