"""Most-consumed items chart data."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .coercion import as_records, first_present, first_text, safe_number
from .config import CHART_PALETTE
from .schemas import ConsumptionSlice

logger = logging.getLogger(__name__)

FALLBACK_GROUP = "Others"


def consumption_key(item: Any) -> str:
    return first_text(item, ("name", "category", "type"), default=FALLBACK_GROUP)


def consumed_quantity(item: Any) -> float:
    return safe_number(first_present(item, ("quantity_consumed", "quantity"), default=1))


def aggregate_consumption(
    items: Any,
    top_n: int = 5,
    palette: Sequence[str] = CHART_PALETTE,
) -> list[ConsumptionSlice]:
    """Group ``items`` by name and return the ``top_n`` largest consumers.

    Groups beyond ``top_n`` are dropped rather than folded into an
    ``Others`` slice. Ties keep the order in which groups were first seen.
    """

    totals: dict[str, float] = {}
    for item in as_records(items):
        key = consumption_key(item)
        totals[key] = totals.get(key, 0.0) + consumed_quantity(item)

    ranked = sorted(totals.items(), key=lambda entry: entry[1], reverse=True)
    if len(ranked) > top_n:
        logger.debug("Dropping %d consumption groups beyond top %d", len(ranked) - top_n, top_n)

    return [
        ConsumptionSlice(
            name=name,
            value=value,
            fill=palette[index % len(palette)] if palette else None,
        )
        for index, (name, value) in enumerate(ranked[: max(top_n, 0)])
    ]


__all__ = ["FALLBACK_GROUP", "aggregate_consumption", "consumed_quantity", "consumption_key"]
