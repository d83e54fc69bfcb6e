"""Shared fixtures: a temporary database and a mocked seed feed."""
import json
import pytest
import httpx
from datetime import datetime, timezone
from dashboard import main
from dashboard.models.transaction import Transaction
from dashboard.services.seed import SeedService
from dashboard.storage import database
from dashboard.storage.database import TransactionStore

FEED_URL = "https://feed.test/product_transaction.json"


@pytest.fixture
def store(tmp_path, monkeypatch):
    """Fresh store on a temporary database, used by the API via get_store()."""
    test_store = TransactionStore(str(tmp_path / "transactions.db"))
    monkeypatch.setattr(database, "_transaction_store", test_store)
    return test_store


def make_transaction(id, price, sold, month, year=2022, category="electronics", title=None, description=None):
    return Transaction(
        id=id,
        title=title or f"Item {id}",
        description=description or f"Description of item {id}",
        price=price,
        date_of_sale=datetime(year, month, 15, 10, 30, tzinfo=timezone.utc),
        sold=sold,
        category=category,
    )


@pytest.fixture
def sample_transactions():
    """Transactions spread over March (two years), June and December."""
    return [
        make_transaction(1, 50.0, True, 3, year=2021, category="electronics"),
        make_transaction(2, 150.0, False, 3, year=2022, category="jewelery"),
        make_transaction(3, 100.0, True, 3, year=2022, category="electronics"),
        make_transaction(4, 101.0, True, 3, year=2021, category="men's clothing"),
        make_transaction(5, 10000.0, False, 3, year=2022, category="electronics"),
        make_transaction(6, 899.99, True, 6, year=2022, category="women's clothing",
                         title="Rain Jacket Women Windbreaker", description="Lightweight STRIPED jacket"),
        make_transaction(7, 329.85, False, 6, year=2021, category="men's clothing",
                         title="Fjallraven Backpack", description="Your perfect pack for everyday use"),
        make_transaction(8, 22.3, True, 6, year=2022, category="men's clothing",
                         title="Slim Fit T-Shirts", description="100% cotton"),
        make_transaction(9, 695.0, True, 12, year=2021, category="jewelery"),
    ]


@pytest.fixture
def seeded_store(store, sample_transactions):
    store.replace_all(sample_transactions)
    return store


@pytest.fixture
def feed_items():
    """Raw items in the shape of the third-party feed."""
    return [
        {
            "id": 1,
            "title": "Fjallraven Foldsack No. 1 Backpack, Fits 15 Laptops",
            "price": 329.85,
            "description": "Your perfect pack for everyday use and walks in the forest.",
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
            "sold": False,
            "dateOfSale": "2021-11-27T20:29:54+05:30",
        },
        {
            "id": 2,
            "title": "Mens Casual Premium Slim Fit T-Shirts",
            "price": 44.6,
            "description": "",
            "category": None,
            "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
            "sold": True,
            "dateOfSale": "2021-10-27T20:29:54+05:30",
        },
        {
            "id": 3,
            "title": "Mens Cotton Jacket",
            "price": 615.89,
            "sold": True,
            "dateOfSale": "2022-01-01T02:00:00+05:30",
        },
    ]


def mock_feed_service(payload, status_code=200):
    """SeedService whose HTTP calls are answered by a MockTransport."""
    def handler(request: httpx.Request) -> httpx.Response:
        if isinstance(payload, Exception):
            raise payload
        return httpx.Response(status_code, content=json.dumps(payload).encode(),
                              headers={"content-type": "application/json"})

    return SeedService(FEED_URL, timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.fixture
def feed_service():
    """Factory for SeedService instances backed by a mocked feed."""
    return mock_feed_service


@pytest.fixture
def mock_feed(monkeypatch, feed_items):
    """Point the API's seed service at the mocked feed."""
    service = mock_feed_service(feed_items)
    monkeypatch.setattr(main, "seed_service", service)
    return service
