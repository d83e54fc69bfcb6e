"""Tests for the SQLite transaction store."""
import sqlite3
from datetime import timezone
import pytest
from dashboard.models.transaction import Transaction
from dashboard.storage.database import TransactionStore
from conftest import make_transaction


def test_replace_all_returns_count(store, sample_transactions):
    assert store.replace_all(sample_transactions) == 9
    assert store.count() == 9


def test_round_trip_keeps_fields(seeded_store, sample_transactions):
    """Test stored transactions come back unchanged."""
    page, total = seeded_store.search(limit=100)
    assert total == 9
    assert page == sample_transactions
    assert page[0].date_of_sale.tzinfo == timezone.utc


def test_duplicate_ids_are_kept(store):
    """Identifier uniqueness is not enforced."""
    store.replace_all([
        make_transaction(1, 10.0, True, 5),
        make_transaction(1, 20.0, False, 5),
    ])
    page, total = store.search()
    assert total == 2
    assert [tx.price for tx in page] == [10.0, 20.0]


def test_failed_replace_keeps_previous_records(seeded_store):
    """A failed write rolls back the delete."""
    valid = make_transaction(99, 10.0, True, 5)
    broken = Transaction.model_construct(**{**valid.__dict__, "title": None})

    with pytest.raises(sqlite3.IntegrityError):
        seeded_store.replace_all([broken])

    assert seeded_store.count() == 9


def test_search_offset_and_limit(seeded_store):
    page, total = seeded_store.search(offset=7, limit=5)
    assert total == 9
    assert [tx.id for tx in page] == [8, 9]


def test_get_by_month_across_years(seeded_store):
    """Test month filtering ignores the year."""
    march = seeded_store.get_by_month(3)
    assert [tx.id for tx in march] == [1, 2, 3, 4, 5]
    assert {tx.date_of_sale.year for tx in march} == {2021, 2022}
    assert seeded_store.get_by_month(1) == []


def test_store_persists_between_instances(tmp_path, sample_transactions):
    """Test a second store on the same file sees the data."""
    path = str(tmp_path / "shared.db")
    TransactionStore(path).replace_all(sample_transactions)
    assert TransactionStore(path).count() == 9


def test_search_casefolds_non_ascii(store):
    """Test search matching folds case beyond ASCII."""
    store.replace_all([
        make_transaction(1, 45.0, True, 1, title="Écharpe Élégante"),
        make_transaction(2, 45.0, True, 1, title="ÉCHARPE ROUGE"),
    ])
    page, total = store.search(search="écharpe")
    assert total == 2
    assert [tx.id for tx in page] == [1, 2]
