"""Pydantic schemas returned by the reducers and the API."""
from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Schema(BaseModel):
    """Base for read-only, camelCase-serialized output rows."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class StockStatus(str, Enum):
    AVAILABLE = "Available"
    LOW_STOCK = "Low Stock"
    UNAVAILABLE = "Unavailable"


class StockTab(str, Enum):
    ALL = "all"
    AVAILABLE = "available"
    LOW_STOCK = "low-stock"
    UNAVAILABLE = "unavailable"


class TransactionStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"
    OTHER = "Other"


class RequestFilterMode(str, Enum):
    ALL = "all"
    SINGLE = "single"
    RANGE = "range"


class StockView(Schema):
    id: str | int | None = None
    item_name: str = Field("", alias="itemName")
    quantity: float = 0.0
    unit: str = ""
    min_threshold: float = Field(0.0, alias="minThreshold")
    status: StockStatus


class StockSummary(Schema):
    total: int = 0
    available: int = 0
    low_stock: int = Field(0, alias="lowStock")
    unavailable: int = 0


class ConsumptionSlice(Schema):
    name: str
    value: float
    fill: str | None = None


class OrderedItemRow(Schema):
    name: str
    orders: float


class Transaction(Schema):
    id: str
    date: str | None = None
    vendor: str = "N/A"
    items: list[str] = Field(default_factory=list)
    amount: float = Field(0.0, ge=0)
    status: TransactionStatus = TransactionStatus.PENDING
    notes: str = ""


class FinancialSummary(Schema):
    total_purchases: float = Field(0.0, alias="totalPurchases")
    total_consumption: float = Field(0.0, alias="totalConsumption")
    outstanding_payments: float = Field(0.0, alias="outstandingPayments")
    paid_count: int = Field(0, alias="paidCount")
    pending_count: int = Field(0, alias="pendingCount")


class VendorExpense(Schema):
    vendor: str
    amount: float
    color: str | None = None


class RequestItem(Schema):
    name: str
    quantity: float = 0.0
    price: float = 0.0


class InventoryRequest(Schema):
    id: str | int | None = None
    date: dt.date | None = None
    requested_by: str = Field("Kitchen Staff", alias="requestedBy")
    items: list[RequestItem] = Field(default_factory=list)
    total_price: float = Field(0.0, alias="totalPrice")


class InventoryRequestList(Schema):
    requests: list[InventoryRequest]
    total_value: float = Field(0.0, alias="totalValue")


class DashboardStats(Schema):
    total_items: int = Field(0, alias="totalItems")
    vendors: int = 0
    out_of_stock: int = Field(0, alias="outOfStock")


class DashboardOverview(Schema):
    stats: DashboardStats
    most_consumed: list[ConsumptionSlice] = Field(default_factory=list, alias="mostConsumed")
    most_ordered: list[OrderedItemRow] = Field(default_factory=list, alias="mostOrdered")


class HealthStatus(BaseModel):
    status: Literal["ok"] = "ok"
    environment: str


__all__ = [
    "ConsumptionSlice",
    "DashboardOverview",
    "DashboardStats",
    "FinancialSummary",
    "HealthStatus",
    "InventoryRequest",
    "InventoryRequestList",
    "OrderedItemRow",
    "RequestFilterMode",
    "RequestItem",
    "StockStatus",
    "StockSummary",
    "StockTab",
    "StockView",
    "Transaction",
    "TransactionStatus",
    "VendorExpense",
]
