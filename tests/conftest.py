from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from inventory_dashboard.api import create_app, get_backend
from inventory_dashboard.client import BackendError
from inventory_dashboard.config import Settings


class FakeBackend:
    """Stands in for :class:`BackendClient` with canned upstream records."""

    def __init__(self, records: dict[str, list[dict[str, Any]]]) -> None:
        self.records = records
        self.error: BackendError | None = None
        self.requested: list[str] = []

    async def fetch(self, resource: str) -> list[dict[str, Any]]:
        self.requested.append(resource)
        if self.error is not None:
            raise self.error
        return self.records.get(resource, [])


@pytest.fixture()
def upstream_records() -> dict[str, list[dict[str, Any]]]:
    return {
        "items": [
            {"item_id": 1, "name": "Rice", "category": "Grains", "quantity": 5},
            {"item_id": 2, "name": "Rice", "category": "Grains", "quantity": 3},
            {"item_id": 3, "name": "Oil", "category": "Cooking", "quantity": "10"},
        ],
        "vendors": [
            {"vendor_id": 1, "vendor_name": "Fresh Farms"},
            {"vendor_id": 2, "vendor_name": "Spice Hub"},
        ],
        "stocks": [
            {"stock_id": 1, "item_name": "Basmati Rice", "quantity": 45, "unit": "kg", "min_threshold": 10},
            {"stock_id": 2, "item_name": "Refined Oil", "quantity": 8, "unit": "liters", "min_threshold": 10},
            {"stock_id": 3, "item_name": "Onions", "quantity": 0, "unit": "kg", "min_threshold": 5},
            {"stock_id": 4, "item_name": "Brown Rice", "quantity": "2", "unit": "kg", "min_threshold": "5"},
        ],
        "orders": [
            {"order_id": 1, "items": [{"item": "Basmati Rice", "quantity": 4}, {"name": "Oil", "qty": 2}]},
            {"order_id": 2, "items": [{"item_name": "Basmati", "quantity": "3"}]},
        ],
        "billing": [
            {
                "billing_id": 11,
                "vendor_name": "Fresh Farms",
                "order_date": "2024-05-01",
                "items": [{"name": "Rice", "price": "600"}, {"name": "Dal", "price": 400}],
                "status": "Paid",
            },
            {
                "billing_id": 12,
                "vendor_name": "Spice Hub",
                "item_name": "Turmeric",
                "cost": "250",
                "status": "Pending",
            },
        ],
        "inventory-requests": [
            {
                "request_id": "R1",
                "request_date": "2024-05-01T09:30:00Z",
                "requested_by": "Chef Anu",
                "items": [{"item_name": "Rice", "quantity": 2, "price": "120"}],
            },
            {
                "id": "R2",
                "date": "2024-05-03",
                "items": [{"name": "Oil", "quantity": 1, "price": 90}],
                "total_price": "100",
            },
        ],
    }


@pytest.fixture()
def backend(upstream_records: dict[str, list[dict[str, Any]]]) -> FakeBackend:
    return FakeBackend(upstream_records)


@pytest.fixture()
def app(backend: FakeBackend) -> FastAPI:
    test_settings = Settings(
        environment="test",
        app_name="Test Inventory Dashboard",
        backend_base_url="http://upstream.test/api",
    )

    async def override_get_backend() -> AsyncIterator[FakeBackend]:
        yield backend

    app = create_app(test_settings)
    app.dependency_overrides[get_backend] = override_get_backend
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
