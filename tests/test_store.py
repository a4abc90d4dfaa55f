import json

import pytest

from expense_dashboard.db.store import ExpenseStore, JsonFileBackend, MemoryBackend, StorageError

sample_expense = {
    "id": "abc123",
    "title": "Groceries",
    "amount": 42.5,
    "date": "2025-11-02",
    "category": "food",
    "created_at": "2025-11-02T10:00:00",
    "updated_at": "2025-11-02T10:00:00",
}


def test_put_and_get_expense():
    store = ExpenseStore(MemoryBackend())
    store.put_expense(dict(sample_expense))
    assert store.get_expense("abc123")["title"] == "Groceries"
    assert store.get_expense("missing") is None
    assert len(store.list_expenses()) == 1


def test_put_replaces_same_id():
    store = ExpenseStore(MemoryBackend())
    store.put_expense(dict(sample_expense))
    store.put_expense({**sample_expense, "amount": 10.0})
    expenses = store.list_expenses()
    assert len(expenses) == 1
    assert expenses[0]["amount"] == 10.0


def test_update_expense():
    store = ExpenseStore(MemoryBackend())
    store.put_expense(dict(sample_expense))
    updated = store.update_expense("abc123", {"amount": 12.0})
    assert updated["amount"] == 12.0
    assert updated["title"] == "Groceries"
    assert updated["updated_at"] != sample_expense["updated_at"]
    assert store.get_expense("abc123")["amount"] == 12.0


def test_update_missing_expense_writes_nothing():
    backend = MemoryBackend()
    store = ExpenseStore(backend)
    store.put_expense(dict(sample_expense))
    assert store.update_expense("missing", {"amount": 1.0}) is None
    assert store.list_expenses() == [sample_expense]


def test_delete_expense():
    store = ExpenseStore(MemoryBackend())
    store.put_expense(dict(sample_expense))
    assert store.delete_expense("abc123") is True
    assert store.delete_expense("abc123") is False
    assert store.list_expenses() == []


def test_settings_round_trip():
    store = ExpenseStore(MemoryBackend())
    assert store.get_settings() is None
    store.save_settings({"budget": 1500.0, "currency": "EUR"})
    assert store.get_settings() == {"budget": 1500.0, "currency": "EUR"}


def test_json_file_backend_persists(tmp_path):
    path = tmp_path / "nested" / "store.json"
    store = ExpenseStore(JsonFileBackend(path))
    store.put_expense(dict(sample_expense))
    store.save_settings({"budget": 900.0})

    reopened = ExpenseStore(JsonFileBackend(path))
    assert reopened.get_expense("abc123") == sample_expense
    assert reopened.get_settings() == {"budget": 900.0}
    assert set(json.loads(path.read_text())) == {"expenses", "settings"}


def test_json_file_backend_missing_file_is_empty(tmp_path):
    store = ExpenseStore(JsonFileBackend(tmp_path / "store.json"))
    assert store.list_expenses() == []
    assert store.get_settings() is None


def test_corrupt_store_raises_storage_error(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json")
    store = ExpenseStore(JsonFileBackend(path))
    with pytest.raises(StorageError):
        store.list_expenses()
    with pytest.raises(StorageError):
        store.save_settings({"budget": 1.0})
    assert path.read_text() == "{not json"


def test_non_object_store_raises_storage_error(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(StorageError):
        ExpenseStore(JsonFileBackend(path)).get_settings()


@pytest.mark.parametrize("expenses", [{"abc123": sample_expense}, [sample_expense, 1], ["x"]])
def test_malformed_expenses_raise_storage_error(expenses):
    store = ExpenseStore(MemoryBackend({"expenses": expenses}))
    with pytest.raises(StorageError):
        store.list_expenses()
    with pytest.raises(StorageError):
        store.get_expense("abc123")


@pytest.mark.parametrize("saved", [[1], "oops", 3])
def test_malformed_settings_raise_storage_error(saved):
    with pytest.raises(StorageError):
        ExpenseStore(MemoryBackend({"settings": saved})).get_settings()
