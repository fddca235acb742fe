"""Shared test fixtures."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from packtrack.api.deps import get_service
from packtrack.main import app
from packtrack.schemas.record import PackingRecord
from packtrack.services.packing_service import PackingService
from packtrack.services.store_client import StoreClient


@pytest.fixture
def make_record() -> Callable[..., PackingRecord]:
    """Factory for packing records with sensible defaults."""
    counter = iter(range(10_000))

    def _make(**fields: Any) -> PackingRecord:
        values: dict[str, Any] = {
            "id": f"test-{next(counter)}",
            "date": "2024-12-25",
            "customer": "Toyota",
            "mode": "Sea",
            "product": "Electronics",
            "si_qty": 1,
            "qty": 100,
        }
        values.update(fields)
        return PackingRecord(**values)

    return _make


@pytest.fixture
def store() -> StoreClient:
    """Store client with mocked network operations."""
    client = StoreClient(store_url="http://store.test/exec", timeout=5.0)
    client.fetch_all = AsyncMock(return_value=[])  # type: ignore[method-assign]
    client.append = AsyncMock(return_value=True)  # type: ignore[method-assign]
    return client


@pytest.fixture
def service(store: StoreClient) -> PackingService:
    """Packing service backed by the mocked store."""
    return PackingService(store=store, sample_size=10)


@pytest.fixture
async def client(service: PackingService) -> AsyncClient:
    """HTTP client for the app, wired to the test packing service."""
    app.dependency_overrides[get_service] = lambda: service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
