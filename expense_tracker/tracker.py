"""
tracker.py - core application logic

Responsibilities:
 - keep an in-memory list of Expense objects, reloaded in full from SQLite
   after every mutation (storage is the source of truth)
 - provide the commands consumed by the UI:
     add_expense, start_editing, save_edit, cancel_edit,
     delete_expense, set_filter
 - derive the filtered view (totals, per-category totals) via filters.py

Screen state (form text, the id being edited, the selected window) lives in
an immutable ScreenState. Each command takes the current state and returns
the next one; invalid input returns the state unchanged and writes nothing.
"""

from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Union
import datetime
import math
import re

from expense_tracker.config import get_logger, get_settings
from expense_tracker.filters import ExpenseView, TimeFilter, build_view
from expense_tracker.models import Expense
from expense_tracker.storage import ExpenseStorage

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScreenState:
    """Form fields, editing pointer and selected time window."""
    amount: str = ""
    category: str = ""
    note: str = ""
    editing_id: Optional[int] = None
    filter: TimeFilter = TimeFilter.ALL

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def cleared(self) -> "ScreenState":
        """Empty form and no record being edited; the filter is kept."""
        return replace(self, amount="", category="", note="", editing_id=None)


# leading ASCII number: "12abc" and "12,50" read as 12, "1_000" as 1
AMOUNT_PREFIX = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def parse_amount(text) -> Optional[float]:
    """
    Parse user input into a positive amount from its leading number.
    Returns None for anything that isn't a finite number greater than zero.
    """
    match = AMOUNT_PREFIX.match(str(text if text is not None else ""))
    if match is None:
        return None
    value = float(match.group(1))
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def format_amount(amount) -> str:
    """Amount as form text: whole numbers without a trailing ".0"."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return str(amount)
    if value.is_integer():
        return str(int(value))
    return str(value)


def clean_category(text) -> str:
    return str(text or "").strip()


def clean_note(text) -> Optional[str]:
    """Trimmed note, or None when nothing is left."""
    return str(text or "").strip() or None


class ExpenseTracker:
    """
    Single-instance style tracker object. The UI creates one ExpenseTracker()
    per session and routes every button press through its commands.
    """

    def __init__(
        self,
        db_path: Optional[str] = None,
        storage: Optional[ExpenseStorage] = None,
        clock: Optional[Callable[[], datetime.date]] = None,
    ):
        self.storage = storage or ExpenseStorage(db_path or get_settings().db_path)
        # local calendar date, shared by the date stamp and the week/month windows
        self.clock = clock or datetime.date.today
        # in-memory list of Expense objects, ordered like storage.list_all()
        self.expenses: List[Expense] = []
        self.storage.ensure_schema()
        self.reload()
        logger.info("Loaded %d expenses from %s", self.storage.count(), self.storage.db_path)

    def today(self) -> str:
        """Current date as ISO "YYYY-MM-DD"."""
        return self.clock().isoformat()

    def reload(self) -> List[Expense]:
        self.expenses = self.storage.list_all()
        return self.expenses

    def _validated(self, state: ScreenState):
        amount = parse_amount(state.amount)
        if amount is None:
            logger.debug("Ignoring command: invalid amount %r", state.amount)
            return None
        category = clean_category(state.category)
        if not category:
            logger.debug("Ignoring command: empty category")
            return None
        return amount, category, clean_note(state.note)

    # -----------------------
    # Commands
    # -----------------------
    def add_expense(self, state: ScreenState) -> ScreenState:
        """
        Insert a new expense dated today from the form fields.
        Invalid input returns `state` unchanged.
        """
        fields = self._validated(state)
        if fields is None:
            return state
        amount, category, note = fields
        self.storage.insert(amount, category, note, self.today())
        self.reload()
        return state.cleared()

    def start_editing(self, state: ScreenState, expense: Expense) -> ScreenState:
        """Load an expense into the form and remember its id."""
        return replace(
            state,
            amount=format_amount(expense.amount),
            category=expense.category or "",
            note=expense.note or "",
            editing_id=expense.id,
        )

    def save_edit(self, state: ScreenState) -> ScreenState:
        """
        Write the form fields back to the expense being edited.
        The expense date is never changed.
        """
        if state.editing_id is None:
            logger.debug("Ignoring save: no expense is being edited")
            return state
        fields = self._validated(state)
        if fields is None:
            return state
        amount, category, note = fields
        self.storage.update(state.editing_id, amount, category, note)
        self.reload()
        return state.cleared()

    def cancel_edit(self, state: ScreenState) -> ScreenState:
        return state.cleared()

    def delete_expense(self, state: ScreenState, expense_id: int) -> ScreenState:
        self.storage.delete(expense_id)
        self.reload()
        return state

    def set_filter(self, state: ScreenState, selector: Union[TimeFilter, str]) -> ScreenState:
        return replace(state, filter=TimeFilter(selector))

    def view(self, state: ScreenState) -> ExpenseView:
        """Filtered list and totals for the state's time window."""
        return build_view(self.expenses, state.filter, today=self.clock())
