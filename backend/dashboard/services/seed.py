"""Seeding the transaction store from the third-party feed."""
import asyncio
import logging
import sqlite3
from typing import Any, List, Optional
import httpx
from pydantic import ValidationError
from dashboard.exceptions import SeedError
from dashboard.models.transaction import FeedTransaction, Transaction
from dashboard.storage.database import TransactionStore

logger = logging.getLogger(__name__)


class SeedService:
    """Fetches the seed feed and replaces the stored collection with it."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the service.

        Args:
            url: Location of the JSON array feed
            timeout: Network timeout in seconds for the fetch
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def fetch_feed(self) -> List[Any]:
        """GET the feed and return its JSON array."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(self.url)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array from feed, got {type(data).__name__}")
        return data

    @staticmethod
    def normalize(items: List[Any]) -> List[Transaction]:
        """Validate raw feed items and fill defaults for blank fields."""
        return [FeedTransaction.model_validate(item).to_transaction() for item in items]

    async def seed(self, store: TransactionStore) -> int:
        """
        Replace every stored transaction with the current feed contents.

        Returns:
            Number of transactions inserted

        Raises:
            SeedError: If the fetch, validation or write fails
        """
        try:
            items = await self.fetch_feed()
            transactions = self.normalize(items)
            count = await asyncio.to_thread(store.replace_all, transactions)
        except (httpx.HTTPError, ValueError, ValidationError, OverflowError, sqlite3.Error) as e:
            logger.exception("Error initializing database from %s: %s", self.url, e)
            raise SeedError("Failed to initialize database") from e

        logger.info("Seeded %d transactions from %s", count, self.url)
        return count
