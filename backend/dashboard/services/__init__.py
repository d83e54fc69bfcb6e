from .aggregation import TransactionAggregator
from .seed import SeedService

__all__ = [
    "TransactionAggregator",
    "SeedService",
]
