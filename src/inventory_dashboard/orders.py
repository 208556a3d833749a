"""Most-ordered items chart data."""
from __future__ import annotations

from typing import Any

from .coercion import as_records, first_present, first_text, get_field, safe_number
from .schemas import OrderedItemRow

ITEM_NAME_KEYS = ("name", "item_name", "item", "ItemName", "Item")
ITEM_QUANTITY_KEYS = ("quantity", "qty")
UNKNOWN_ITEM = "Unknown"


def canonical_item_name(order_item: Any) -> str:
    return first_text(order_item, ITEM_NAME_KEYS, default=UNKNOWN_ITEM)


def display_name(name: str) -> str:
    """Shorten a canonical item name to its first word for chart labels."""

    words = name.split()
    return words[0] if words else UNKNOWN_ITEM


def ordered_quantity(order_item: Any) -> float:
    return safe_number(first_present(order_item, ITEM_QUANTITY_KEYS, default=1))


def tally_ordered_items(orders: Any, min_rows: int = 5) -> list[OrderedItemRow]:
    """Sum ordered quantities per item across all orders.

    Always returns exactly ``min_rows`` rows: the largest totals first, padded
    with ``Unknown`` rows of zero when fewer items were ordered.
    """

    totals: dict[str, float] = {}
    for order in as_records(orders):
        for order_item in as_records(get_field(order, "items")):
            name = display_name(canonical_item_name(order_item))
            totals[name] = totals.get(name, 0.0) + ordered_quantity(order_item)

    rows = [
        OrderedItemRow(name=name, orders=total)
        for name, total in sorted(totals.items(), key=lambda entry: entry[1], reverse=True)
    ]
    while len(rows) < min_rows:
        rows.append(OrderedItemRow(name=UNKNOWN_ITEM, orders=0))
    return rows[: max(min_rows, 0)]


__all__ = [
    "ITEM_NAME_KEYS",
    "UNKNOWN_ITEM",
    "canonical_item_name",
    "display_name",
    "ordered_quantity",
    "tally_ordered_items",
]
