"""
components.py - reusable Streamlit components for the expense screen

This module contains pure-UI helpers used by the dashboard:
 - display_filter_bar(current, on_select)
 - display_summary(view): total for the window, per-category rows and a pie chart
 - display_expense_form(state, on_add, on_save, on_cancel)
 - display_expense_list(expenses, on_edit, on_delete)

Widgets never call the tracker directly. Buttons fire the callbacks handed
in by the dashboard, which run before Streamlit's next rerun so form
widgets can be refilled or cleared from session_state.
"""

from typing import Callable, Dict, List
import streamlit as st
import pandas as pd
import altair as alt

from expense_tracker.filters import ExpenseView, TimeFilter
from expense_tracker.models import Expense
from expense_tracker.tracker import ScreenState

# session_state keys bound to the form's text inputs
AMOUNT_KEY = "amount_input"
CATEGORY_KEY = "category_input"
NOTE_KEY = "note_input"

FILTER_LABELS = {
    TimeFilter.ALL: "All",
    TimeFilter.WEEK: "This Week",
    TimeFilter.MONTH: "This Month",
}

PALETTE = [
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf"
]


def display_filter_bar(current: TimeFilter, on_select: Callable[[TimeFilter], None]):
    """Horizontal All / This Week / This Month selector."""
    options = list(TimeFilter)

    def _changed():
        on_select(st.session_state["filter_choice"])

    st.radio(
        "Show",
        options=options,
        index=options.index(current),
        format_func=lambda f: FILTER_LABELS[f],
        horizontal=True,
        key="filter_choice",
        on_change=_changed,
        label_visibility="collapsed",
    )


def _category_chart(category_totals: Dict[str, float]):
    df = pd.DataFrame(
        [{"category": cat, "amount": float(amt)} for cat, amt in category_totals.items()]
    )
    if df.empty or df["amount"].sum() <= 0:
        return None
    total_amount = df["amount"].sum()
    df["percent"] = df["amount"] / total_amount * 100

    ordered = list(category_totals.keys())
    # cycle the palette when there are more categories than colors
    times = (len(ordered) + len(PALETTE) - 1) // len(PALETTE)
    colors = (PALETTE * max(1, times))[: len(ordered)]
    color_scale = alt.Scale(domain=ordered, range=colors)

    return alt.Chart(df).mark_arc(innerRadius=50).encode(
        theta=alt.Theta(field="amount", type="quantitative"),
        color=alt.Color(
            field="category",
            type="nominal",
            scale=color_scale,
            legend=alt.Legend(title="Category"),
            sort=ordered,
        ),
        tooltip=[
            alt.Tooltip("category:N", title="Category"),
            alt.Tooltip("amount:Q", title="Amount", format=".2f"),
            alt.Tooltip("percent:Q", title="Share", format=".1f"),
        ],
    )


def display_summary(view: ExpenseView):
    """Show the window total and the per-category breakdown."""
    st.markdown(f"**Total Spending ({view.label}):**")
    st.markdown(f"## \\${view.total:.2f}")

    st.markdown("**By Category:**")
    if view.is_empty:
        st.write("No expenses for this filter.")
        return
    for cat, total in view.category_totals.items():
        col_name, col_amount = st.columns([3, 1])
        col_name.write(cat)
        col_amount.write(f"\\${total:.2f}")

    chart = _category_chart(view.category_totals)
    if chart is not None:
        st.altair_chart(chart, width="stretch")


def display_expense_form(
    state: ScreenState,
    on_add: Callable[[], None],
    on_save: Callable[[], None],
    on_cancel: Callable[[], None],
):
    """
    Amount / category / note inputs. The submit button adds a new expense,
    or saves the expense being edited when state.editing_id is set.
    """
    st.text_input("Amount", placeholder="Amount (e.g. 12.50)", key=AMOUNT_KEY)
    st.text_input("Category", placeholder="Category (Food, Books, Rent...)", key=CATEGORY_KEY)
    st.text_input("Note", placeholder="Note (optional)", key=NOTE_KEY)

    if state.is_editing:
        st.button("Save Changes", on_click=on_save, type="primary", width="stretch")
        st.button("Cancel Edit", on_click=on_cancel, width="stretch")
    else:
        st.button("Add Expense", on_click=on_add, type="primary", width="stretch")


def display_expense_list(
    expenses: List[Expense],
    on_edit: Callable[[Expense], None],
    on_delete: Callable[[int], None],
):
    """One row per expense with edit (✎) and delete (✕) buttons."""
    if not expenses:
        st.write("No expenses yet.")
        return

    for e in expenses:
        with st.container(border=True):
            col_info, col_edit, col_delete = st.columns([6, 1, 1])
            with col_info:
                st.markdown("**" + e.amount_display().replace("$", "\\$") + "**")
                st.write(e.category)
                if e.note:
                    st.caption(e.note)
                if e.date:
                    st.caption(e.date)
            col_edit.button("✎", key=f"edit_{e.id}", on_click=on_edit, args=(e,), help="Edit")
            col_delete.button("✕", key=f"delete_{e.id}", on_click=on_delete, args=(e.id,), help="Delete")
