import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import settings

logger = logging.getLogger(__name__)

class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URI)
    mongodb.db = mongodb.client[settings.MONGODB_DB]

    await create_indexes(mongodb.db)
    logger.info("Connected to MongoDB: %s", settings.MONGODB_DB)

async def disconnect_from_mongo():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
    logger.info("Disconnected from MongoDB")

async def create_indexes(db: AsyncIOMotorDatabase):
    """Create database indexes."""
    # Expense indexes
    await db["expenses"].create_index("group_id")
    await db["expenses"].create_index("date")
    await db["expenses"].create_index([("paid_by_user_id", 1), ("group_id", 1)])
    await db["expenses"].create_index("splits.user_id")

    # Settlement indexes
    await db["settlements"].create_index("group_id")
    await db["settlements"].create_index([("paid_by_user_id", 1), ("received_by_user_id", 1)])

    # Group membership
    await db["groups"].create_index("members.user_id")

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db
