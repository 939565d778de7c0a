"""
models.py - Data model definitions

This file defines the Expense dataclass used across the tracker and UI.
Expenses are read from the SQLite `expenses` table (see storage.py) and
built from plain dicts or sqlite3 rows.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Expense:
    """
    Represents a single logged expense.

    Fields:
      - id: integer id assigned by the database on insert (never changes)
      - amount: positive amount spent
      - category: free-text label (e.g. Food, Books, Rent)
      - note: optional free-text note, None when absent
      - date: ISO date string "YYYY-MM-DD", set when the expense is logged
    """
    id: int = 0
    amount: float = 0.0
    category: str = ""
    note: Optional[str] = None
    date: str = ""  # stored as ISO "YYYY-MM-DD"

    def amount_display(self) -> str:
        try:
            return f"${float(self.amount):.2f}"
        except (TypeError, ValueError):
            return "$0.00"

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Expense":
        """
        Construct an Expense from a plain dict.
        Uses defaults for missing keys so partial rows are tolerated.
        """
        return Expense(
            id=d.get("id", 0),
            amount=d.get("amount", 0.0),
            category=d.get("category", "") or "",
            note=d.get("note") or None,
            date=d.get("date", "") or "",
        )

    @staticmethod
    def from_row(row) -> "Expense":
        """Build an Expense from a sqlite3.Row of the expenses table."""
        return Expense.from_dict(dict(row))
