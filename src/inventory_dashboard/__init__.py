"""Dashboard aggregates for the inventory admin panel."""
from __future__ import annotations

from .consumption import aggregate_consumption
from .finance import summarize
from .orders import tally_ordered_items
from .stock import classify, filter_stock

__all__ = [
    "aggregate_consumption",
    "classify",
    "filter_stock",
    "summarize",
    "tally_ordered_items",
]
