"""Monthly aggregates over stored transactions."""
import asyncio
from typing import Dict, List, Optional, Tuple
from dashboard.models.transaction import Transaction
from dashboard.models.aggregates import (
    CategoryCount,
    CombinedAggregates,
    PriceRangeCount,
    SalesStatistics,
)
from dashboard.storage.database import TransactionStore

# (inclusive upper bound, label); None marks the open-ended top band
PRICE_BANDS: List[Tuple[Optional[float], str]] = [
    (100, "0-100"),
    (200, "101-200"),
    (300, "201-300"),
    (400, "301-400"),
    (500, "401-500"),
    (600, "501-600"),
    (700, "601-700"),
    (800, "701-800"),
    (900, "801-900"),
    (None, "901-above"),
]


def price_band(price: float) -> str:
    """Label of the right-inclusive band a price falls in."""
    for upper, label in PRICE_BANDS:
        if upper is None or price <= upper:
            return label
    return PRICE_BANDS[-1][1]


def compute_statistics(transactions: List[Transaction]) -> SalesStatistics:
    """Sale total over sold items, plus sold and unsold counts."""
    sold = [tx for tx in transactions if tx.sold]
    total_sale = sum(tx.price for tx in sold)
    return SalesStatistics(
        total_sale=round(total_sale, 2),
        total_sold=len(sold),
        total_not_sold=len(transactions) - len(sold),
    )


def bucket_prices(transactions: List[Transaction]) -> List[PriceRangeCount]:
    """Count transactions per price band. Every band is present, in order."""
    counts: Dict[str, int] = {label: 0 for _, label in PRICE_BANDS}
    for tx in transactions:
        counts[price_band(tx.price)] += 1
    return [PriceRangeCount(price_range=label, count=count) for label, count in counts.items()]


def count_categories(transactions: List[Transaction]) -> List[CategoryCount]:
    """Count transactions per category, in order of first appearance."""
    counts: Dict[str, int] = {}
    for tx in transactions:
        counts[tx.category] = counts.get(tx.category, 0) + 1
    return [CategoryCount(category=category, count=count) for category, count in counts.items()]


class TransactionAggregator:
    """Computes month-scoped aggregates from the transaction store."""

    def __init__(self, store: TransactionStore):
        self.store = store

    def statistics(self, month: int) -> SalesStatistics:
        return compute_statistics(self.store.get_by_month(month))

    def price_histogram(self, month: int) -> List[PriceRangeCount]:
        return bucket_prices(self.store.get_by_month(month))

    def category_breakdown(self, month: int) -> List[CategoryCount]:
        return count_categories(self.store.get_by_month(month))

    async def combined(self, month: int) -> CombinedAggregates:
        """
        Run the three aggregates concurrently and merge them.

        Each aggregate issues its own query on a worker thread. If any of them
        raises, the exception propagates and no partial result is returned.
        """
        statistics, histogram, categories = await asyncio.gather(
            asyncio.to_thread(self.statistics, month),
            asyncio.to_thread(self.price_histogram, month),
            asyncio.to_thread(self.category_breakdown, month),
        )
        return CombinedAggregates(
            statistics=statistics,
            bar_chart_data=histogram,
            pie_chart_data=categories,
        )
