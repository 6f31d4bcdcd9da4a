"""
Tests for health check endpoints.

These tests verify:
- Liveness endpoint returns 200
- Readiness reflects the client collection and its unique client.id index
"""

import pytest
from unittest.mock import patch

from authz_storage.database.databases.storage_db import COLLECTION_NAME


def _ready_with(db):
    """Point the readiness check at a given database."""
    async def _get_database(db_name=None):
        return db
    return patch("authz_storage.routers.health.get_database", side_effect=_get_database)


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_endpoint_returns_200_when_api_running(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestReadinessEndpoint:
    """Tests for GET /health/ready endpoint."""

    def test_ready_when_storage_initialized(self, client, mock_storage_db):
        """An initialized store should report ready."""
        with _ready_with(mock_storage_db):
            response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["collection"] == COLLECTION_NAME
        assert data["checks"] == {"collection": True, "indexes": True}

    def test_not_ready_without_client_collection(self, client, mock_async_mongo_client):
        """A database init_storage never ran against should return 503."""
        with _ready_with(mock_async_mongo_client["uninitialized"]):
            response = client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"] == {"collection": False, "indexes": False}

    @pytest.mark.asyncio
    async def test_not_ready_when_client_id_index_not_unique(
        self, client, mock_async_mongo_client
    ):
        """A plain client.id index does not satisfy the uniqueness requirement."""
        db = mock_async_mongo_client["non_unique"]
        await db.create_collection(COLLECTION_NAME)
        await db[COLLECTION_NAME].create_index([("client.id", 1)])

        with _ready_with(db):
            response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"] == {"collection": True, "indexes": False}

    def test_unavailable_when_database_unreachable(self, client):
        """Driver failures should be reported as 503, not raised."""
        with patch(
            "authz_storage.routers.health.get_database",
            side_effect=Exception("Connection refused"),
        ):
            response = client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unavailable"
        assert "Connection refused" in data["error"]
