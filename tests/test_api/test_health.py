"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient

from packtrack.services.packing_service import PackingService


class TestHealthEndpoints:
    """Tests for health check routes."""

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    @pytest.mark.asyncio
    async def test_health_live_endpoint(self, client: AsyncClient):
        response = await client.get("/health/live")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"] == {"alive": True}

    @pytest.mark.asyncio
    async def test_health_ready_before_load(self, client: AsyncClient):
        response = await client.get("/health/ready")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "degraded"
        assert data["checks"] == {"records_loaded": False, "store_configured": True}

    @pytest.mark.asyncio
    async def test_health_ready_after_load(self, client: AsyncClient, service: PackingService):
        await service.load()

        response = await client.get("/health/ready")

        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["records_loaded"] is True

    @pytest.mark.asyncio
    async def test_root_endpoint(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "PackTrack"
