from .transaction import Transaction, FeedTransaction
from .aggregates import (
    SeedResponse,
    TransactionPage,
    SalesStatistics,
    PriceRangeCount,
    CategoryCount,
    CombinedAggregates,
)

__all__ = [
    "Transaction",
    "FeedTransaction",
    "SeedResponse",
    "TransactionPage",
    "SalesStatistics",
    "PriceRangeCount",
    "CategoryCount",
    "CombinedAggregates",
]
