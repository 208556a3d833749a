from __future__ import annotations

import httpx
import pytest

from inventory_dashboard.client import (
    BackendClient,
    BackendError,
    BackendUnauthorized,
    SessionContext,
    unwrap_records,
)
from inventory_dashboard.config import Settings


def _settings() -> Settings:
    return Settings(environment="test", backend_base_url="http://upstream.test/api/")


def test_unwrap_records_envelopes() -> None:
    rows = [{"id": 1}, {"id": 2}]
    assert unwrap_records(rows) == rows
    assert unwrap_records({"success": True, "data": rows}) == rows
    assert unwrap_records({"data": {"data": rows}}) == rows
    assert unwrap_records({"success": True, "items": rows}) == rows
    assert unwrap_records({"success": False, "message": "nope"}) == []
    assert unwrap_records(None) == []
    assert unwrap_records("oops") == []
    assert unwrap_records([{"id": 1}, "junk", None]) == [{"id": 1}]


def test_session_context_from_authorization() -> None:
    assert SessionContext.from_authorization("Bearer abc").token == "abc"
    assert SessionContext.from_authorization("bearer  xyz ").token == "xyz"
    assert SessionContext.from_authorization("Basic abc").token is None
    assert SessionContext.from_authorization(None).headers() == {}
    assert SessionContext(token="t").headers() == {"Authorization": "Bearer t"}


async def test_fetch_unwraps_envelope_and_forwards_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True, "data": [{"stock_id": 1}]})

    async with BackendClient(
        _settings(), SessionContext(token="secret"), transport=httpx.MockTransport(handler)
    ) as backend:
        records = await backend.fetch("stocks")

    assert records == [{"stock_id": 1}]
    assert str(seen[0].url) == "http://upstream.test/api/stocks"
    assert seen[0].headers["Authorization"] == "Bearer secret"


async def test_fetch_maps_unauthorized() -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(401, json={"message": "Token expired"})
    )
    async with BackendClient(_settings(), transport=transport) as backend:
        with pytest.raises(BackendUnauthorized) as excinfo:
            await backend.fetch("items")
    assert excinfo.value.message == "Token expired"
    assert excinfo.value.status_code == 401


async def test_fetch_maps_server_errors() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    async with BackendClient(_settings(), transport=transport) as backend:
        with pytest.raises(BackendError) as excinfo:
            await backend.fetch("billing")
    assert excinfo.value.status_code == 500
    assert "500" in excinfo.value.message


async def test_fetch_maps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with BackendClient(_settings(), transport=httpx.MockTransport(handler)) as backend:
        with pytest.raises(BackendError) as excinfo:
            await backend.fetch("orders")
    assert excinfo.value.status_code is None


async def test_fetch_rejects_unknown_resource() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
    async with BackendClient(_settings(), transport=transport) as backend:
        with pytest.raises(ValueError):
            await backend.fetch("payroll")


@pytest.mark.parametrize("resource", ["vendors", "users", "billing", "inventory-requests"])
async def test_fetch_requests_each_resource_path(resource: str) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"success": True, "data": [{"id": 1}]})

    async with BackendClient(_settings(), transport=httpx.MockTransport(handler)) as backend:
        assert await backend.fetch(resource) == [{"id": 1}]
    assert seen == [f"/api/{resource}"]
