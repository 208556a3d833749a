"""FastAPI router configuration."""
from __future__ import annotations

import asyncio
import datetime as dt
import logging
from collections.abc import AsyncIterator
from typing import Any, Sequence

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Query, status

from . import finance, inventory_requests, schemas
from .client import BackendClient, BackendError, BackendUnauthorized, SessionContext
from .config import Settings, get_settings
from .consumption import aggregate_consumption
from .logger import setup_logging
from .orders import tally_ordered_items
from .overview import build_overview
from .stock import filter_stock, stock_summary, stock_views

logger = logging.getLogger(__name__)

router = APIRouter()


def provide_settings() -> Settings:
    """Dependency returning the active :class:`Settings` instance."""

    return get_settings()


async def get_backend(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(provide_settings),
) -> AsyncIterator[BackendClient]:
    """Yield an upstream client carrying the caller's bearer token."""

    async with BackendClient(settings, SessionContext.from_authorization(authorization)) as backend:
        yield backend


async def _fetch(backend: BackendClient, *resources: str) -> list[list[dict[str, Any]]]:
    try:
        return list(await asyncio.gather(*(backend.fetch(resource) for resource in resources)))
    except BackendUnauthorized as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message) from exc
    except BackendError as exc:
        logger.warning("Upstream fetch of %s failed: %s", ", ".join(resources), exc.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc


@router.get("/health", response_model=schemas.HealthStatus, tags=["system"])
async def health_check(settings: Settings = Depends(provide_settings)) -> schemas.HealthStatus:
    return schemas.HealthStatus(environment=settings.environment)


@router.get("/stock", response_model=list[schemas.StockView], tags=["stock"])
async def list_stock(
    search: str = "",
    tab: schemas.StockTab = schemas.StockTab.ALL,
    backend: BackendClient = Depends(get_backend),
) -> Sequence[schemas.StockView]:
    (stocks,) = await _fetch(backend, "stocks")
    return filter_stock(stock_views(stocks), search, tab)


@router.get("/stock/summary", response_model=schemas.StockSummary, tags=["stock"])
async def get_stock_summary(backend: BackendClient = Depends(get_backend)) -> schemas.StockSummary:
    (stocks,) = await _fetch(backend, "stocks")
    return stock_summary(stock_views(stocks))


@router.get("/dashboard/overview", response_model=schemas.DashboardOverview, tags=["dashboard"])
async def get_overview(
    settings: Settings = Depends(provide_settings),
    backend: BackendClient = Depends(get_backend),
) -> schemas.DashboardOverview:
    items, vendors, stocks, orders = await _fetch(backend, "items", "vendors", "stocks", "orders")
    return build_overview(
        items,
        vendors,
        stocks,
        orders,
        top_n=settings.top_n,
        min_rows=settings.min_rows,
        palette=settings.chart_palette,
    )


@router.get(
    "/dashboard/consumption", response_model=list[schemas.ConsumptionSlice], tags=["dashboard"]
)
async def get_consumption(
    top_n: int | None = Query(default=None, ge=1),
    settings: Settings = Depends(provide_settings),
    backend: BackendClient = Depends(get_backend),
) -> Sequence[schemas.ConsumptionSlice]:
    (items,) = await _fetch(backend, "items")
    return aggregate_consumption(
        items, top_n=top_n or settings.top_n, palette=settings.chart_palette
    )


@router.get(
    "/dashboard/most-ordered", response_model=list[schemas.OrderedItemRow], tags=["dashboard"]
)
async def get_most_ordered(
    min_rows: int | None = Query(default=None, ge=1),
    settings: Settings = Depends(provide_settings),
    backend: BackendClient = Depends(get_backend),
) -> Sequence[schemas.OrderedItemRow]:
    (orders,) = await _fetch(backend, "orders")
    return tally_ordered_items(orders, min_rows=min_rows or settings.min_rows)


@router.get("/finance/transactions", response_model=list[schemas.Transaction], tags=["finance"])
async def list_transactions(
    backend: BackendClient = Depends(get_backend),
) -> Sequence[schemas.Transaction]:
    (billing,) = await _fetch(backend, "billing")
    return finance.normalize_transactions(billing)


@router.get("/finance/summary", response_model=schemas.FinancialSummary, tags=["finance"])
async def get_financial_summary(
    settings: Settings = Depends(provide_settings),
    backend: BackendClient = Depends(get_backend),
) -> schemas.FinancialSummary:
    (billing,) = await _fetch(backend, "billing")
    return finance.summarize(
        finance.normalize_transactions(billing), consumption_ratio=settings.consumption_ratio
    )


@router.get(
    "/finance/vendor-expenses", response_model=list[schemas.VendorExpense], tags=["finance"]
)
async def list_vendor_expenses(
    settings: Settings = Depends(provide_settings),
    backend: BackendClient = Depends(get_backend),
) -> Sequence[schemas.VendorExpense]:
    (billing,) = await _fetch(backend, "billing")
    return finance.vendor_expenses(
        finance.normalize_transactions(billing), palette=settings.vendor_palette
    )


@router.get(
    "/inventory-requests", response_model=schemas.InventoryRequestList, tags=["requests"]
)
async def list_inventory_requests(
    mode: schemas.RequestFilterMode = schemas.RequestFilterMode.ALL,
    day: dt.date | None = None,
    start: dt.date | None = None,
    end: dt.date | None = None,
    backend: BackendClient = Depends(get_backend),
) -> schemas.InventoryRequestList:
    (records,) = await _fetch(backend, "inventory-requests")
    requests = inventory_requests.filter_requests(
        inventory_requests.normalize_requests(records), mode, day=day, start=start, end=end
    )
    return schemas.InventoryRequestList(
        requests=requests, total_value=inventory_requests.total_value(requests)
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    app = FastAPI(title=settings.app_name)
    app.dependency_overrides[provide_settings] = lambda: settings
    app.include_router(router)
    return app


app = create_app()


__all__ = ["app", "create_app", "get_backend", "provide_settings"]
