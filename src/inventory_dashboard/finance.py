"""Finance screen reducers: transactions, summary cards and vendor expenses."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .coercion import as_records, first_text, get_field, safe_number
from .config import CONSUMPTION_RATIO, VENDOR_PALETTE
from .schemas import FinancialSummary, Transaction, TransactionStatus, VendorExpense

UNKNOWN_VENDOR = "Unknown Vendor"
_PAID_STATUSES = {"paid", "completed"}


def transaction_status(record: Any) -> TransactionStatus:
    """Resolve a billing record's payment status.

    A bill marked paid wins; otherwise the order status, then the bill
    status, decide. A record with neither is Pending. Anything that is not
    paid or pending (cancelled, rejected, ...) is Other.
    """

    status = str(get_field(record, "status") or "").strip().lower()
    order_status = str(get_field(record, "order_status") or "").strip().lower()
    if status in _PAID_STATUSES:
        return TransactionStatus.PAID
    effective = order_status or status or "pending"
    if effective in _PAID_STATUSES:
        return TransactionStatus.PAID
    if effective == "pending":
        return TransactionStatus.PENDING
    return TransactionStatus.OTHER


def normalize_transaction(record: Any, index: int = 0) -> Transaction:
    """Map a raw billing record onto a :class:`Transaction`."""

    nested = as_records(get_field(record, "items"))
    if nested:
        items = [first_text(item, ("name",), default="Unknown Item") for item in nested]
        amount = sum(safe_number(get_field(item, "price")) for item in nested)
    else:
        item_name = first_text(record, ("item_name",))
        items = [item_name] if item_name else []
        amount = safe_number(get_field(record, "cost"))

    number = first_text(record, ("billing_id", "order_id"), default=str(index + 1))
    return Transaction(
        id=f"TXN{number}",
        date=first_text(record, ("order_date", "date")) or None,
        vendor=first_text(record, ("vendor_name", "vendor"), default="N/A"),
        items=items,
        amount=max(amount, 0.0),
        status=transaction_status(record),
        notes=first_text(record, ("notes",)),
    )


def normalize_transactions(records: Any) -> list[Transaction]:
    return [normalize_transaction(record, index) for index, record in enumerate(as_records(records))]


def _status_of(transaction: Any) -> TransactionStatus:
    if isinstance(transaction, Transaction):
        return transaction.status
    return transaction_status(transaction)


def summarize(transactions: Any, consumption_ratio: float = CONSUMPTION_RATIO) -> FinancialSummary:
    """Compute the finance summary cards.

    ``totalConsumption`` is a fixed fraction of purchases, and outstanding
    payments are the amounts still pending. Transactions that are neither
    paid nor pending count towards purchases only.
    """

    total_purchases = 0.0
    outstanding = 0.0
    paid_count = 0
    pending_count = 0
    for transaction in as_records(transactions):
        amount = safe_number(get_field(transaction, "amount"))
        total_purchases += amount
        status = _status_of(transaction)
        if status is TransactionStatus.PAID:
            paid_count += 1
        elif status is TransactionStatus.PENDING:
            pending_count += 1
            outstanding += amount

    return FinancialSummary(
        total_purchases=total_purchases,
        total_consumption=total_purchases * consumption_ratio,
        outstanding_payments=outstanding,
        paid_count=paid_count,
        pending_count=pending_count,
    )


def vendor_expenses(
    transactions: Any, palette: Sequence[str] = VENDOR_PALETTE
) -> list[VendorExpense]:
    """Total spend per vendor in the order vendors first appear."""

    totals: dict[str, float] = {}
    for transaction in as_records(transactions):
        vendor = first_text(transaction, ("vendor", "vendor_name"), default=UNKNOWN_VENDOR)
        totals[vendor] = totals.get(vendor, 0.0) + safe_number(get_field(transaction, "amount"))

    return [
        VendorExpense(
            vendor=vendor,
            amount=amount,
            color=palette[index % len(palette)] if palette else None,
        )
        for index, (vendor, amount) in enumerate(totals.items())
    ]


__all__ = [
    "normalize_transaction",
    "normalize_transactions",
    "summarize",
    "transaction_status",
    "vendor_expenses",
]
