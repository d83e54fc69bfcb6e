"""Response models for listing and aggregate endpoints."""
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from dashboard.models.transaction import Transaction


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SeedResponse(CamelModel):
    """Response from database initialization."""

    message: str
    count: int


class TransactionPage(CamelModel):
    """One page of the transaction listing."""

    current_page: int
    per_page: int
    total_records: int
    total_pages: int
    transactions: List[Transaction] = Field(default_factory=list)


class SalesStatistics(CamelModel):
    """Sale totals for a month."""

    total_sale: float = Field(..., description="Sum of price over sold items")
    total_sold: int = Field(..., description="Number of sold items")
    total_not_sold: int = Field(..., description="Number of unsold items")


class PriceRangeCount(CamelModel):
    """Membership count of one price band."""

    price_range: str
    count: int


class CategoryCount(CamelModel):
    """Number of records in one category."""

    category: str
    count: int


class CombinedAggregates(CamelModel):
    """Statistics, histogram and category breakdown for one month."""

    statistics: SalesStatistics
    bar_chart_data: List[PriceRangeCount]
    pie_chart_data: List[CategoryCount]
