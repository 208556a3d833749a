"""Dashboard overview cards and charts."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .coercion import as_records
from .config import CHART_PALETTE
from .consumption import aggregate_consumption
from .orders import tally_ordered_items
from .schemas import DashboardOverview, DashboardStats, StockStatus
from .stock import stock_views


def dashboard_stats(items: Any, vendors: Any, stocks: Any) -> DashboardStats:
    out_of_stock = sum(1 for row in stock_views(stocks) if row.status is StockStatus.UNAVAILABLE)
    return DashboardStats(
        total_items=len(as_records(items)),
        vendors=len(as_records(vendors)),
        out_of_stock=out_of_stock,
    )


def build_overview(
    items: Any,
    vendors: Any,
    stocks: Any,
    orders: Any,
    *,
    top_n: int = 5,
    min_rows: int = 5,
    palette: Sequence[str] = CHART_PALETTE,
) -> DashboardOverview:
    return DashboardOverview(
        stats=dashboard_stats(items, vendors, stocks),
        most_consumed=aggregate_consumption(items, top_n=top_n, palette=palette),
        most_ordered=tally_ordered_items(orders, min_rows=min_rows),
    )


__all__ = ["build_overview", "dashboard_stats"]
