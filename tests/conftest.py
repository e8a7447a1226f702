import os
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.main import app
from app.db.mongo import create_indexes, get_db
from app.models.user import UserInDB
from tests.factories import ALICE, BOB, CAROL

# Test database configuration
TEST_MONGODB_URI = os.getenv("MONGODB_URI")
TEST_MONGODB_DB = "tabby_test"


@pytest.fixture
def alice() -> UserInDB:
    return UserInDB(_id=ALICE, name="Alice", email="alice@example.com")


@pytest.fixture
def users_by_id():
    return {
        ALICE: UserInDB(_id=ALICE, name="Alice", email="alice@example.com"),
        BOB: UserInDB(_id=BOB, name="Bob", email="bob@example.com", image_url="https://img/bob.png"),
        CAROL: UserInDB(_id=CAROL, name="carol", email="carol@example.com"),
    }


@pytest.fixture
def client():
    """
    FastAPI test client without the Mongo lifespan.

    get_db is overridden with a MagicMock so services can be built; tests
    patch the service methods they exercise.
    """
    app.dependency_overrides[get_db] = lambda: MagicMock()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_db() -> AsyncIOMotorDatabase:
    """Fixture for test MongoDB database (for async repository tests)."""
    if not TEST_MONGODB_URI:
        pytest.skip("MONGODB_URI not set")

    client = AsyncIOMotorClient(TEST_MONGODB_URI)
    db = client[TEST_MONGODB_DB]

    # Drop database before test to ensure clean state
    await client.drop_database(TEST_MONGODB_DB)
    await create_indexes(db)

    yield db

    await client.drop_database(TEST_MONGODB_DB)
    client.close()
