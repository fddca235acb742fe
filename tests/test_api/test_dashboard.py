"""Tests for the dashboard endpoint."""

import pytest
from httpx import AsyncClient

from packtrack.services.packing_service import PackingService


@pytest.fixture
def loaded(service: PackingService, make_record) -> PackingService:
    service._replace(
        [
            make_record(customer="Toyota", qty=100, package_counts={"RETURNABLE": 4}),
            make_record(customer="Honda", qty=300, mode="Air", date="2024-11-02"),
            make_record(customer="Toyota", qty=50, package_counts={"RETURNABLE": 4, "WARP": 10}),
        ],
        "store",
    )
    return service


class TestDashboard:
    """Tests for GET /dashboard."""

    @pytest.mark.asyncio
    async def test_empty(self, client: AsyncClient):
        response = await client.get("/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["record_count"] == 0
        assert data["stats"]["top_customer"] == "N/A"
        assert data["stats"]["top_mode"] == "N/A"
        assert data["timeline"] == []
        assert data["group_stats"]["Returnable Package"] == 0

    @pytest.mark.asyncio
    async def test_aggregates(self, client: AsyncClient, loaded: PackingService):
        response = await client.get("/dashboard")

        data = response.json()
        assert data["record_count"] == 3
        assert data["stats"]["total_items"] == 450
        assert data["stats"]["total_packages"] == 18
        assert data["stats"]["top_customer"] == "Honda"
        assert data["stats"]["top_mode"] == "Sea"
        assert [p["date"] for p in data["timeline"]] == ["2024-11-02", "2024-12-25"]
        assert data["group_stats"]["Returnable Package"] == 8
        assert data["ratio_stats"]["Returnable Package"] == {"used": 8, "max_capacity": 4}
        assert data["ratio_stats"]["Warp Package"]["max_capacity"] == 1

    @pytest.mark.asyncio
    async def test_filtered(self, client: AsyncClient, loaded: PackingService):
        response = await client.get("/dashboard", params={"customer": "Toyota", "month": 12})

        data = response.json()
        assert data["record_count"] == 2
        assert data["stats"]["top_customer"] == "Toyota"
        assert data["top_customers"] == [{"name": "Toyota", "value": 150}]
