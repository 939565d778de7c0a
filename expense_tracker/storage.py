"""
storage.py - SQLite persistence for expenses

ExpenseStorage owns the single `expenses` table and is the source of truth
for the app. Every call opens a short-lived connection, runs one statement
and commits, so each mutation is atomic on its own.

Missing ids on update/delete are not errors. Any sqlite3 failure is logged
and re-raised as StorageError.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional
import os
import sqlite3

from expense_tracker.config import get_logger
from expense_tracker.models import Expense

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    note TEXT,
    date TEXT NOT NULL               -- ISO date YYYY-MM-DD
);
"""


class StorageError(RuntimeError):
    """Raised when the SQLite store rejects or fails a statement."""


class ExpenseStorage:
    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            if conn is not None:
                conn.rollback()
            logger.exception("SQLite call failed on %s", self.db_path)
            raise StorageError(str(exc)) from exc
        finally:
            if conn is not None:
                conn.close()

    def ensure_schema(self):
        """Create the expenses table if it does not exist yet. Safe to call repeatedly."""
        dirn = os.path.dirname(os.path.abspath(self.db_path))
        os.makedirs(dirn, exist_ok=True)
        with self._connect() as conn:
            conn.execute(SCHEMA)

    def list_all(self) -> List[Expense]:
        """Return every expense, newest date first; same-day rows newest insert first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, amount, category, note, date FROM expenses ORDER BY date DESC, id DESC"
            ).fetchall()
        return [Expense.from_row(r) for r in rows]

    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM expenses").fetchone()[0]

    def insert(self, amount: float, category: str, note: Optional[str], date: str) -> int:
        with self._connect() as conn:
            cur = conn.execute(
                "INSERT INTO expenses (amount, category, note, date) VALUES (?, ?, ?, ?)",
                (amount, category, note, date),
            )
            new_id = cur.lastrowid
        logger.info("Inserted expense id=%s (category=%s, amount=%s, date=%s)", new_id, category, amount, date)
        return new_id

    def update(self, expense_id: int, amount: float, category: str, note: Optional[str]):
        with self._connect() as conn:
            cur = conn.execute(
                "UPDATE expenses SET amount = ?, category = ?, note = ? WHERE id = ?",
                (amount, category, note, expense_id),
            )
            changed = cur.rowcount
        if changed:
            logger.info("Updated expense id=%s (category=%s, amount=%s)", expense_id, category, amount)
        else:
            logger.info("Expense id=%s not found, nothing updated", expense_id)

    def delete(self, expense_id: int):
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            changed = cur.rowcount
        if changed:
            logger.info("Deleted expense id=%s", expense_id)
        else:
            logger.info("Expense id=%s not found, nothing deleted", expense_id)
