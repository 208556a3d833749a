"""Stock status classification, search and tab filtering."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .coercion import as_records, first_present, first_text, record_id, safe_number
from .schemas import StockStatus, StockSummary, StockTab, StockView

logger = logging.getLogger(__name__)

_TAB_STATUS = {
    StockTab.AVAILABLE: StockStatus.AVAILABLE,
    StockTab.LOW_STOCK: StockStatus.LOW_STOCK,
    StockTab.UNAVAILABLE: StockStatus.UNAVAILABLE,
}


def classify(quantity: Any, min_threshold: Any) -> StockStatus:
    """Return the stock status for ``quantity`` against ``min_threshold``.

    Nothing on hand is Unavailable regardless of the threshold; a quantity at
    or below the threshold is Low Stock; anything else is Available.
    """

    on_hand = safe_number(quantity)
    threshold = safe_number(min_threshold)
    if on_hand <= 0:
        return StockStatus.UNAVAILABLE
    if on_hand <= threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.AVAILABLE


def to_stock_view(record: Any) -> StockView:
    quantity = safe_number(first_present(record, ("quantity", "qty")))
    min_threshold = safe_number(first_present(record, ("min_threshold", "minThreshold")))
    return StockView(
        id=record_id(record, ("stock_id", "id")),
        item_name=first_text(record, ("item_name", "itemName", "name")),
        quantity=quantity,
        unit=first_text(record, ("unit",)),
        min_threshold=min_threshold,
        status=classify(quantity, min_threshold),
    )


def stock_views(records: Any) -> list[StockView]:
    return [to_stock_view(record) for record in as_records(records)]


def _resolve_tab(tab: StockTab | str | None) -> StockTab:
    if isinstance(tab, StockTab):
        return tab
    if not tab:
        return StockTab.ALL
    try:
        return StockTab(str(tab).strip().lower())
    except ValueError:
        logger.warning("Unknown stock tab %r, showing all rows", tab)
        return StockTab.ALL


def filter_stock(
    rows: Sequence[StockView],
    search_term: str | None = "",
    tab: StockTab | str | None = StockTab.ALL,
) -> list[StockView]:
    """Return the rows matching both the search term and the selected tab.

    The search is a case-insensitive substring match on the item name. The
    original relative order of ``rows`` is kept.
    """

    needle = (search_term or "").lower()
    wanted = _TAB_STATUS.get(_resolve_tab(tab))
    return [
        row
        for row in rows
        if needle in row.item_name.lower() and (wanted is None or row.status == wanted)
    ]


def stock_summary(rows: Iterable[StockView]) -> StockSummary:
    counts = {status: 0 for status in StockStatus}
    total = 0
    for row in rows:
        counts[row.status] += 1
        total += 1
    return StockSummary(
        total=total,
        available=counts[StockStatus.AVAILABLE],
        low_stock=counts[StockStatus.LOW_STOCK],
        unavailable=counts[StockStatus.UNAVAILABLE],
    )


__all__ = ["classify", "filter_stock", "stock_summary", "stock_views", "to_stock_view"]
