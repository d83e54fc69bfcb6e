"""Database storage layer using SQLite."""
import math
import sqlite3
from datetime import datetime
from typing import List, Optional, Tuple
from contextlib import contextmanager
from dashboard.models.transaction import Transaction
from dashboard.config import settings


def _escape_like(text: str) -> str:
    """Escape LIKE wildcards so the search text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _casefold(value: Optional[str]) -> Optional[str]:
    """SQL function: Unicode-aware case folding (SQLite's LIKE only folds ASCII)."""
    return value.casefold() if value is not None else None


def _parse_price(text: str) -> Optional[float]:
    """Return the search text as a price if it is a finite number."""
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class TransactionStore:
    """Storage for transactions."""

    def __init__(self, db_path: str = "transactions.db"):
        self.db_path = db_path
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS transactions (
                    row_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    id INTEGER NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    price REAL NOT NULL,
                    date_of_sale TEXT NOT NULL,
                    sale_month INTEGER NOT NULL,
                    sold INTEGER NOT NULL,
                    category TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_sale_month
                ON transactions(sale_month)
            """)
            conn.commit()

    @contextmanager
    def _get_conn(self):
        """Get database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        try:
            yield conn
        finally:
            conn.close()

    @staticmethod
    def _to_transaction(row: sqlite3.Row) -> Transaction:
        return Transaction(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            price=row["price"],
            date_of_sale=datetime.fromisoformat(row["date_of_sale"]),
            sold=bool(row["sold"]),
            category=row["category"],
        )

    def replace_all(self, transactions: List[Transaction]) -> int:
        """
        Replace the whole collection with the given transactions.

        The delete and the inserts share one database transaction, so a failed
        insert leaves the previous records in place.

        Returns:
            Number of records inserted
        """
        with self._get_conn() as conn:
            try:
                conn.execute("DELETE FROM transactions")
                conn.executemany("""
                    INSERT INTO transactions
                    (id, title, description, price, date_of_sale, sale_month, sold, category)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, [
                    (
                        tx.id,
                        tx.title,
                        tx.description,
                        tx.price,
                        tx.date_of_sale.isoformat(),
                        tx.date_of_sale.month,
                        int(tx.sold),
                        tx.category,
                    )
                    for tx in transactions
                ])
                conn.commit()
            except (sqlite3.Error, OverflowError):
                conn.rollback()
                raise
        return len(transactions)

    def count(self) -> int:
        """Total number of stored transactions."""
        with self._get_conn() as conn:
            return conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]

    def search(
        self,
        search: str = "",
        month: Optional[int] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Transaction], int]:
        """
        Get one page of transactions matching a search text and month.

        Args:
            search: Case-insensitive substring of title or description, or an
                exact price when the text is numeric. Empty matches everything.
            month: Calendar month (1-12) of the sale, any year
            offset: Number of matching rows to skip
            limit: Maximum number of rows to return

        Returns:
            Tuple of (page of transactions, total matching count)
        """
        clauses = []
        params: list = []

        search = search.strip()
        if search:
            pattern = f"%{_escape_like(search.casefold())}%"
            conditions = [
                "casefold(title) LIKE ? ESCAPE '\\'",
                "casefold(description) LIKE ? ESCAPE '\\'",
            ]
            params.extend([pattern, pattern])
            price = _parse_price(search)
            if price is not None:
                conditions.append("price = ?")
                params.append(price)
            clauses.append("(" + " OR ".join(conditions) + ")")

        if month is not None:
            clauses.append("sale_month = ?")
            params.append(month)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with self._get_conn() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) FROM transactions{where}", params
            ).fetchone()[0]
            rows = conn.execute(
                f"SELECT * FROM transactions{where} ORDER BY id ASC, row_id ASC LIMIT ? OFFSET ?",
                params + [limit, offset],
            ).fetchall()

        return [self._to_transaction(row) for row in rows], total

    def get_by_month(self, month: int) -> List[Transaction]:
        """Get every transaction sold in a calendar month, across all years."""
        with self._get_conn() as conn:
            rows = conn.execute("""
                SELECT * FROM transactions
                WHERE sale_month = ?
                ORDER BY id ASC, row_id ASC
            """, (month,)).fetchall()
            return [self._to_transaction(row) for row in rows]


# Global instance
_transaction_store = None


def get_store() -> TransactionStore:
    """Get the transaction store instance."""
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = TransactionStore(settings.database_path)
    return _transaction_store
