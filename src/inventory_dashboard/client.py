"""HTTP client for the upstream inventory REST API."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from .config import Settings

logger = logging.getLogger(__name__)

RESOURCES = (
    "items",
    "vendors",
    "orders",
    "users",
    "stocks",
    "billing",
    "inventory-requests",
)


class BackendError(RuntimeError):
    """Raised when the upstream API cannot serve a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendUnauthorized(BackendError):
    """Raised when the upstream API rejects the forwarded token."""


@dataclass(frozen=True)
class SessionContext:
    """Caller session forwarded to the upstream API."""

    token: str | None = None

    @classmethod
    def from_authorization(cls, header: str | None) -> "SessionContext":
        if not header:
            return cls()
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() != "bearer" or not credentials.strip():
            return cls()
        return cls(token=credentials.strip())

    def headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


def unwrap_records(payload: Any) -> list[dict[str, Any]]:
    """Extract the record list from an upstream response body.

    Handles bare lists, the ``{"success": ..., "data": [...]}`` envelope, a
    doubly nested ``data`` and, as a last resort, the first list value of a
    mapping.
    """

    if payload is None:
        return []
    if isinstance(payload, list):
        records = payload
    elif isinstance(payload, Mapping):
        data = payload.get("data")
        if isinstance(data, list):
            records = data
        elif isinstance(data, Mapping) and isinstance(data.get("data"), list):
            records = data["data"]
        else:
            records = next((value for value in payload.values() if isinstance(value, list)), [])
    else:
        return []
    return [record for record in records if isinstance(record, Mapping)]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping) and body.get("message"):
        return str(body["message"])
    return f"{response.status_code} {response.reason_phrase}".strip()


class BackendClient:
    """Read-only access to the upstream list endpoints."""

    def __init__(
        self,
        settings: Settings,
        session: SessionContext | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._session = session or SessionContext()
        self._client = httpx.AsyncClient(
            base_url=settings.backend_base_url,
            timeout=settings.request_timeout,
            headers={"Content-Type": "application/json", **self._session.headers()},
            transport=transport,
        )

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, resource: str) -> list[dict[str, Any]]:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown upstream resource: {resource}")
        try:
            response = await self._client.get(f"/{resource}")
        except httpx.HTTPError as exc:
            logger.error("Request to /%s failed: %s", resource, exc)
            raise BackendError(f"Upstream request failed: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise BackendUnauthorized(_error_message(response), response.status_code)
        if response.is_error:
            message = _error_message(response)
            logger.error("Upstream /%s returned %s: %s", resource, response.status_code, message)
            raise BackendError(message, response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise BackendError(f"Upstream /{resource} returned invalid JSON") from exc
        records = unwrap_records(payload)
        logger.debug("Fetched %d records from /%s", len(records), resource)
        return records


__all__ = [
    "RESOURCES",
    "BackendClient",
    "BackendError",
    "BackendUnauthorized",
    "SessionContext",
    "unwrap_records",
]
