"""Kitchen inventory requests: normalization and date filtering."""
from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence
from typing import Any

from .coercion import as_records, first_present, first_text, get_field, record_id, safe_number
from .schemas import InventoryRequest, RequestFilterMode, RequestItem

logger = logging.getLogger(__name__)

DEFAULT_REQUESTER = "Kitchen Staff"


def _parse_date(value: Any) -> dt.date | None:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug("Ignoring unparseable request date %r", value)
        return None


def normalize_request(record: Any) -> InventoryRequest:
    items = [
        RequestItem(
            name=first_text(item, ("item_name", "name")),
            quantity=safe_number(get_field(item, "quantity")),
            price=safe_number(get_field(item, "price")),
        )
        for item in as_records(get_field(record, "items"))
    ]
    total_price = safe_number(get_field(record, "total_price")) or sum(item.price for item in items)
    return InventoryRequest(
        id=record_id(record, ("id", "request_id", "_id")),
        date=_parse_date(first_present(record, ("request_date", "date", "created_at"))),
        requested_by=first_text(record, ("requested_by", "requestedBy"), default=DEFAULT_REQUESTER),
        items=items,
        total_price=total_price,
    )


def normalize_requests(records: Any) -> list[InventoryRequest]:
    return [normalize_request(record) for record in as_records(records)]


def filter_requests(
    requests: Sequence[InventoryRequest],
    mode: RequestFilterMode | str = RequestFilterMode.ALL,
    day: dt.date | None = None,
    start: dt.date | None = None,
    end: dt.date | None = None,
) -> list[InventoryRequest]:
    """Filter requests to a single day or an inclusive date range.

    A mode whose bounds are missing returns every request, matching the
    screen's behaviour before a date has been picked.
    """

    try:
        mode = RequestFilterMode(mode)
    except ValueError:
        logger.warning("Unknown request filter mode %r, showing all requests", mode)
        mode = RequestFilterMode.ALL

    if mode is RequestFilterMode.SINGLE and day is not None:
        return [request for request in requests if request.date == day]
    if mode is RequestFilterMode.RANGE and start is not None:
        upper = end or start
        return [
            request
            for request in requests
            if request.date is not None and start <= request.date <= upper
        ]
    return list(requests)


def total_value(requests: Sequence[InventoryRequest]) -> float:
    return sum((request.total_price for request in requests), 0.0)


__all__ = [
    "DEFAULT_REQUESTER",
    "filter_requests",
    "normalize_request",
    "normalize_requests",
    "total_value",
]
