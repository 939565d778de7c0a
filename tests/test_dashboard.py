import os

import pytest
from streamlit.testing.v1 import AppTest

APP_FILE = os.path.join(os.path.dirname(__file__), "..", "app.py")


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("EXPENSE_TRACKER_DB", str(tmp_path / "expenses.db"))
    at = AppTest.from_file(APP_FILE, default_timeout=30)
    at.run()
    return at


def _texts(at):
    return [m.value for m in at.markdown] + [w.value for w in at.text]


def test_empty_screen(app):
    assert not app.exception
    assert app.title[0].value == "Student Expense Tracker"
    assert any("All Time Total" in str(v) for v in _texts(app))
    assert [b.label for b in app.button] == ["Add Expense"]


def test_add_expense_through_form(app):
    app.text_input(key="amount_input").input("12.50")
    app.text_input(key="category_input").input("Food")
    app.text_input(key="note_input").input("lunch")
    app.button[0].click().run()
    assert not app.exception
    # the form is cleared and the new row shows up
    assert app.text_input(key="amount_input").value == ""
    assert any("$12.50" in str(v) for v in _texts(app))


def test_invalid_amount_keeps_form(app):
    app.text_input(key="amount_input").input("abc")
    app.text_input(key="category_input").input("Food")
    app.button[0].click().run()
    assert not app.exception
    assert app.text_input(key="amount_input").value == "abc"
    assert any("No expenses yet." in str(v) for v in _texts(app))
