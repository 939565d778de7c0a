"""
dashboard.py - Streamlit UI entrypoint and orchestration

This module wires the UI components (expense_tracker.ui.components) with the
business logic (expense_tracker.tracker). main() builds the single expense
screen: filter bar, spending summary, add/edit form and the expense list.

Design notes:
 - Keep the dashboard responsible only for UI orchestration and presentation.
 - All persistence and validation rules live in expense_tracker.tracker.
 - The ScreenState and the tracker are kept in st.session_state between reruns.
"""

import streamlit as st

from expense_tracker.models import Expense
from expense_tracker.tracker import ExpenseTracker, ScreenState
from expense_tracker.ui import components

TRACKER_KEY = "tracker"
STATE_KEY = "screen_state"


def _tracker() -> ExpenseTracker:
    if TRACKER_KEY not in st.session_state:
        st.session_state[TRACKER_KEY] = ExpenseTracker()
    return st.session_state[TRACKER_KEY]


def _state() -> ScreenState:
    """Stored screen state with the form fields taken from the live widgets."""
    state = st.session_state.get(STATE_KEY) or ScreenState()
    return ScreenState(
        amount=st.session_state.get(components.AMOUNT_KEY, state.amount),
        category=st.session_state.get(components.CATEGORY_KEY, state.category),
        note=st.session_state.get(components.NOTE_KEY, state.note),
        editing_id=state.editing_id,
        filter=state.filter,
    )


def _commit(new_state: ScreenState):
    """Store the new state and push its form fields back into the widgets."""
    st.session_state[STATE_KEY] = new_state
    st.session_state[components.AMOUNT_KEY] = new_state.amount
    st.session_state[components.CATEGORY_KEY] = new_state.category
    st.session_state[components.NOTE_KEY] = new_state.note


def _on_add():
    _commit(_tracker().add_expense(_state()))


def _on_save():
    _commit(_tracker().save_edit(_state()))


def _on_cancel():
    _commit(_tracker().cancel_edit(_state()))


def _on_edit(expense: Expense):
    _commit(_tracker().start_editing(_state(), expense))


def _on_delete(expense_id: int):
    _commit(_tracker().delete_expense(_state(), expense_id))


def _on_filter(selector):
    _commit(_tracker().set_filter(_state(), selector))


def main():
    """
    Streamlit page, top to bottom:
      - filter bar (All / This Week / This Month)
      - total for the window and totals per category
      - add / edit form
      - filtered expense list with edit and delete buttons
    """
    st.title("Student Expense Tracker")
    tracker = _tracker()
    state = _state()

    components.display_filter_bar(state.filter, _on_filter)
    view = tracker.view(state)
    components.display_summary(view)

    st.markdown("---")
    components.display_expense_form(state, on_add=_on_add, on_save=_on_save, on_cancel=_on_cancel)

    st.markdown("---")
    components.display_expense_list(view.expenses, on_edit=_on_edit, on_delete=_on_delete)

    st.caption("Enter your expenses and they'll be saved locally with SQLite.")


if __name__ == "__main__":
    main()
