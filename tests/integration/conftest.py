"""
Integration test fixtures.

These tests require a running MongoDB server.
Set MONGO_TEST_URI (e.g. mongodb://localhost:27017) to run them.
"""
import os
import uuid

import pytest
import pytest_asyncio


@pytest.fixture
def live_mongo_uri():
    """MongoDB URI for live tests; skips when not configured."""
    uri = os.getenv("MONGO_TEST_URI")
    if not uri:
        pytest.skip("MONGO_TEST_URI not set")
    return uri


@pytest_asyncio.fixture
async def live_storage_db(live_mongo_uri):
    """A throwaway database on the live server, initialized like the real app."""
    from motor.motor_asyncio import AsyncIOMotorClient
    from authz_storage.database.setup import init_storage

    client = AsyncIOMotorClient(live_mongo_uri)
    db_name = f"authz_storage_test_{uuid.uuid4().hex[:8]}"
    db = client[db_name]
    await init_storage(db)
    yield db
    await client.drop_database(db_name)
    client.close()
