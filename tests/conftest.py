"""
Global test fixtures for AuthZ Storage.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Client record factories
- FastAPI app and TestClient with the database mocked
"""

import sys
import uuid
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_storage_db(mock_async_mongo_client):
    """Provide a mock storage database initialized like the real app."""
    from authz_storage.database.setup import init_storage

    db = mock_async_mongo_client["authz_storage"]
    await init_storage(db)
    yield db


@pytest_asyncio.fixture
async def client_service(mock_storage_db):
    """ClientService backed by the mock storage database."""
    from authz_storage.services.client_service import ClientService

    return ClientService(mock_storage_db)


# =============================================================================
# Client Record Fixtures
# =============================================================================

@pytest.fixture
def new_client() -> dict:
    """A fresh client payload ready for insert."""
    return {
        "id": str(uuid.uuid4()),
        "sequence": 0,
    }


@pytest.fixture
def mock_client_record() -> dict:
    """A complete client document as stored in MongoDB."""
    return {
        "meta": {
            "created": 1735468800000,
            "updated": 1735468800000,
        },
        "client": {
            "id": "c1d87160-f519-43cd-99b0-18a56370a3dd",
            "sequence": 0,
            "allowedScopes": ["read:/test-authorize-request"],
            "secretHash": "fepHTCljXBM3nb-tXlkkB_jD3KwdMwOqc_VmmBpuTfQ",
        },
    }


@pytest.fixture
def mock_client_record2() -> dict:
    """A second stored client document with no scopes."""
    return {
        "meta": {
            "created": 1735468800000,
            "updated": 1735468800000,
        },
        "client": {
            "id": "30ce98f4-aeca-4499-a4f1-62a2285ba68c",
            "sequence": 0,
            "allowedScopes": [],
            "secretHash": "d4mA8sbohUNR5oDY4KCfUatXoKbX_tB5pVxyBLCyGZM",
        },
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(mock_storage_db):
    """
    Create FastAPI app for testing.

    The lifespan's database lookup is patched to return the mock storage
    database, so startup runs init_storage against mongomock.
    """
    async def _get_database(db_name=None):
        return mock_storage_db

    with patch("authz_storage.main.get_database", side_effect=_get_database), \
         patch("authz_storage.main.close_connections"):
        from authz_storage.main import app
        yield app


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Use this for synchronous endpoint testing.
    """
    with TestClient(app) as c:
        yield c
