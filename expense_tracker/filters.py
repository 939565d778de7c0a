"""
filters.py - time-window filtering and totals over loaded expenses

Everything here is a pure function of (expenses, selected window, today):
nothing touches storage. The dashboard calls build_view() after each reload.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import datetime

from expense_tracker.models import Expense

UNCATEGORIZED = "Uncategorized"


class TimeFilter(str, Enum):
    ALL = "All"
    WEEK = "Week"
    MONTH = "Month"


TOTAL_LABELS = {
    TimeFilter.WEEK: "Total This Week",
    TimeFilter.MONTH: "Total This Month",
    TimeFilter.ALL: "All Time Total",
}


@dataclass
class ExpenseView:
    """Derived values the screen renders for the active window."""
    expenses: List[Expense] = field(default_factory=list)
    total: float = 0.0
    category_totals: Dict[str, float] = field(default_factory=dict)
    label: str = TOTAL_LABELS[TimeFilter.ALL]

    @property
    def is_empty(self) -> bool:
        return not self.expenses


def _expense_date(expense: Expense) -> Optional[datetime.date]:
    try:
        return datetime.date.fromisoformat(str(getattr(expense, "date", "") or ""))
    except ValueError:
        return None


def _amount(expense: Expense) -> float:
    try:
        return float(getattr(expense, "amount", 0.0))
    except (TypeError, ValueError):
        return 0.0


def week_bounds(today: datetime.date) -> Tuple[datetime.date, datetime.date]:
    """Monday and Sunday of the week containing `today` (both inclusive)."""
    monday = today - datetime.timedelta(days=today.weekday())
    return monday, monday + datetime.timedelta(days=6)


def filter_expenses(
    expenses: Iterable[Expense],
    selector: TimeFilter,
    today: Optional[datetime.date] = None,
) -> List[Expense]:
    """
    Return the expenses that fall inside the selected window, order preserved.

    Month and Week compare against `today` (defaults to the local date).
    Expenses with a missing or unparseable date only show up under All.
    """
    selector = TimeFilter(selector)
    if selector == TimeFilter.ALL:
        return list(expenses)

    today = today or datetime.date.today()
    if selector == TimeFilter.MONTH:
        def in_window(d: datetime.date) -> bool:
            return d.year == today.year and d.month == today.month
    else:
        start, end = week_bounds(today)

        def in_window(d: datetime.date) -> bool:
            return start <= d <= end

    out: List[Expense] = []
    for e in expenses:
        d = _expense_date(e)
        if d is None:
            continue
        if in_window(d):
            out.append(e)
    return out


def overall_total(expenses: Iterable[Expense]) -> float:
    """Sum of amounts; anything that isn't a number counts as zero."""
    return round(sum(_amount(e) for e in expenses), 2)


def category_totals(expenses: Iterable[Expense]) -> Dict[str, float]:
    """
    Sum amounts per category, in first-seen order.
    Blank categories are grouped under "Uncategorized".
    """
    totals: Dict[str, float] = {}
    for e in expenses:
        cat = str(getattr(e, "category", "") or "").strip() or UNCATEGORIZED
        totals[cat] = round(totals.get(cat, 0.0) + _amount(e), 2)
    return totals


def total_label(selector: TimeFilter) -> str:
    return TOTAL_LABELS[TimeFilter(selector)]


def build_view(
    expenses: Iterable[Expense],
    selector: TimeFilter,
    today: Optional[datetime.date] = None,
) -> ExpenseView:
    filtered = filter_expenses(expenses, selector, today=today)
    return ExpenseView(
        expenses=filtered,
        total=overall_total(filtered),
        category_totals=category_totals(filtered),
        label=total_label(selector),
    )
