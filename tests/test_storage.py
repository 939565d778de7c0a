import sqlite3

import pytest
from expense_tracker.storage import ExpenseStorage, StorageError


@pytest.fixture
def storage(tmp_path):
    s = ExpenseStorage(str(tmp_path / "expenses.db"))
    s.ensure_schema()
    return s


def test_ensure_schema_is_idempotent(tmp_path):
    db_file = tmp_path / "nested" / "expenses.db"
    s = ExpenseStorage(str(db_file))
    s.ensure_schema()
    s.ensure_schema()
    conn = sqlite3.connect(str(db_file))
    try:
        tables = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'expenses'"
        ).fetchall()
    finally:
        conn.close()
    assert len(tables) == 1
    assert s.count() == 0


def test_insert_returns_increasing_ids(storage):
    first = storage.insert(12.5, "Food", "lunch", "2026-10-14")
    second = storage.insert(5.0, "Food", None, "2026-10-14")
    assert second > first
    assert storage.count() == 2


def test_list_all_orders_by_date_then_id_desc(storage):
    a = storage.insert(1.0, "A", None, "2026-10-01")
    b = storage.insert(2.0, "B", None, "2026-10-14")
    c = storage.insert(3.0, "C", None, "2026-10-01")
    d = storage.insert(4.0, "D", None, "2026-10-14")
    ids = [e.id for e in storage.list_all()]
    assert ids == [d, b, c, a]


def test_list_all_returns_expense_fields(storage):
    new_id = storage.insert(12.5, "Food", "lunch", "2026-10-14")
    storage.insert(3.0, "Books", None, "2026-10-13")
    rows = storage.list_all()
    assert rows[0].id == new_id
    assert rows[0].amount == 12.5
    assert rows[0].category == "Food"
    assert rows[0].note == "lunch"
    assert rows[0].date == "2026-10-14"
    assert rows[1].note is None


def test_update_rewrites_mutable_fields_only(storage):
    new_id = storage.insert(10.0, "Food", "old", "2026-10-01")
    storage.update(new_id, 25.0, "Books", None)
    (row,) = storage.list_all()
    assert row.id == new_id
    assert row.amount == 25.0
    assert row.category == "Books"
    assert row.note is None
    assert row.date == "2026-10-01"


def test_update_missing_id_is_noop(storage):
    storage.insert(10.0, "Food", None, "2026-10-01")
    storage.update(999, 1.0, "X", None)
    (row,) = storage.list_all()
    assert row.amount == 10.0
    assert row.category == "Food"


def test_delete_removes_row(storage):
    keep = storage.insert(1.0, "A", None, "2026-10-01")
    gone = storage.insert(2.0, "B", None, "2026-10-01")
    storage.delete(gone)
    assert [e.id for e in storage.list_all()] == [keep]


def test_delete_missing_id_is_noop(storage):
    storage.insert(1.0, "A", None, "2026-10-01")
    storage.delete(12345)
    assert storage.count() == 1


def test_not_null_violation_raises_storage_error(storage):
    with pytest.raises(StorageError):
        storage.insert(1.0, None, None, "2026-10-01")
    with pytest.raises(StorageError):
        storage.insert(None, "Food", None, "2026-10-01")
    assert storage.count() == 0


def test_ids_are_not_reused_after_delete(storage):
    first = storage.insert(1.0, "A", None, "2026-10-01")
    storage.delete(first)
    second = storage.insert(2.0, "B", None, "2026-10-01")
    assert second > first


def test_unopenable_path_raises_storage_error(tmp_path):
    # the path is an existing directory, not a database file
    s = ExpenseStorage(str(tmp_path))
    with pytest.raises(StorageError):
        s.ensure_schema()
    with pytest.raises(StorageError):
        s.list_all()
