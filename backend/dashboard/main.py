"""FastAPI main application."""
import logging
import math
import sqlite3
from typing import List, Optional
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from dashboard.config import settings
from dashboard.exceptions import DashboardError, MissingMonthError, StorageError
from dashboard.models.aggregates import (
    CategoryCount,
    CombinedAggregates,
    PriceRangeCount,
    SalesStatistics,
    SeedResponse,
    TransactionPage,
)
from dashboard.services.aggregation import TransactionAggregator
from dashboard.services.seed import SeedService
from dashboard.storage.database import get_store
from dashboard.ui import FETCH_ERROR_MESSAGE, bar_chart_data, render_dashboard
from dashboard.utils.months import month_name, parse_month

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger("dashboard")

# Keeps (page - 1) * perPage inside SQLite's 64-bit integer range
MAX_PAGING_VALUE = 2**31

app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
seed_service = SeedService(settings.seed_url, timeout=settings.seed_timeout)


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    """Render application errors as ``{"error": message}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _require_month(month: Optional[str]) -> int:
    """Resolve a required month parameter or raise a 400-class error."""
    if not month:
        raise MissingMonthError()
    return parse_month(month)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": "1.0.0"}


@app.api_route("/api/transactions/initialize", methods=["GET", "POST"], response_model=SeedResponse)
async def initialize_database():
    """
    Seed the database from the third-party feed.

    Existing records are discarded and replaced by the feed contents.
    """
    count = await seed_service.seed(get_store())
    return SeedResponse(message="Database initialized successfully", count=count)


@app.get("/api/transactions", response_model=TransactionPage)
def list_transactions(
    search: str = Query("", description="Matches title/description, or an exact price"),
    page: int = Query(1, ge=1, le=MAX_PAGING_VALUE, description="1-based page number"),
    per_page: int = Query(10, ge=1, le=MAX_PAGING_VALUE, alias="perPage", description="Records per page"),
    month: Optional[str] = Query(None, description="Month name, e.g. March"),
):
    """List transactions with search, month filter and pagination."""
    logger.info("List transactions: search=%r page=%d perPage=%d month=%r", search, page, per_page, month)
    month_number = parse_month(month) if month else None

    try:
        transactions, total = get_store().search(
            search=search,
            month=month_number,
            offset=(page - 1) * per_page,
            limit=per_page,
        )
    except sqlite3.Error as e:
        logger.exception("Error in list_transactions: %s", e)
        raise StorageError("Internal server error") from e

    return TransactionPage(
        current_page=page,
        per_page=per_page,
        total_records=total,
        total_pages=math.ceil(total / per_page),
        transactions=transactions,
    )


@app.get("/api/transactions/statistics", response_model=SalesStatistics)
def get_statistics(month: Optional[str] = Query(None, description="Month name, e.g. March")):
    """Total sale amount and sold / not sold counts for a month, across all years."""
    month_number = _require_month(month)
    try:
        return TransactionAggregator(get_store()).statistics(month_number)
    except sqlite3.Error as e:
        logger.exception("Error fetching statistics: %s", e)
        raise StorageError("Failed to fetch statistics.") from e


@app.get("/api/transactions/barchart", response_model=List[PriceRangeCount])
def get_bar_chart_data(month: Optional[str] = Query(None, description="Month name, e.g. March")):
    """Number of items per price band for a month."""
    month_number = _require_month(month)
    try:
        return TransactionAggregator(get_store()).price_histogram(month_number)
    except sqlite3.Error as e:
        logger.exception("Error fetching bar chart data: %s", e)
        raise StorageError("Failed to fetch bar chart data") from e


@app.get("/api/transactions/piechart", response_model=List[CategoryCount])
def get_pie_chart_data(month: Optional[str] = Query(None, description="Month name, e.g. March")):
    """Number of items per category for a month."""
    month_number = _require_month(month)
    try:
        return TransactionAggregator(get_store()).category_breakdown(month_number)
    except sqlite3.Error as e:
        logger.exception("Error fetching pie chart data: %s", e)
        raise StorageError("Failed to fetch pie chart data") from e


@app.get("/api/transactions/combined", response_model=CombinedAggregates)
async def get_combined_data(
    month: Optional[str] = Query(None, description="Month name; defaults to the configured month"),
):
    """Statistics, bar chart and pie chart data for one month in a single response."""
    month_number = parse_month(month or settings.default_month)
    try:
        return await TransactionAggregator(get_store()).combined(month_number)
    except sqlite3.Error as e:
        logger.exception("Error fetching combined data: %s", e)
        raise StorageError("Failed to fetch combined data") from e


@app.get("/dashboard", response_class=HTMLResponse)
def dashboard(month: Optional[str] = Query(None, description="Initially selected month")):
    """Bar chart page for the price-range histogram."""
    month_number = parse_month(month or settings.dashboard_month)
    selected = month_name(month_number)
    chart_data = None
    error = None
    try:
        chart_data = bar_chart_data(TransactionAggregator(get_store()).price_histogram(month_number))
    except sqlite3.Error as e:
        logger.exception("Error rendering dashboard for %s: %s", selected, e)
        error = FETCH_ERROR_MESSAGE

    return render_dashboard(selected, chart_data, settings.chart_y_max, error=error)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
