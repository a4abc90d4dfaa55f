"""
Local key-value persistence for expenses and user settings.

Data lives under two keys, ``expenses`` (a list of expense documents) and
``settings`` (one settings document). The backend only knows how to read
and write whole values by key; ``ExpenseStore`` implements the expense and
settings operations on top of it.
"""
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expenses"
SETTINGS_KEY = "settings"


class StorageError(Exception):
    """The backend could not read or write its data."""


class MemoryBackend:
    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(data or {})

    def read(self, key: str) -> Any:
        return self._data.get(key)

    def write(self, key: str, value: Any) -> None:
        # Round-trip through JSON so stored values behave like the file backend's
        self._data[key] = json.loads(json.dumps(value))


class JsonFileBackend:
    """All keys in one JSON document on disk."""

    def __init__(self, path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open(encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading store {self._path}: {e}")
            raise StorageError("Failed to access local storage") from e
        if not isinstance(data, dict):
            logger.error(f"Store {self._path} does not contain a JSON object")
            raise StorageError("Failed to access local storage")
        return data

    def read(self, key: str) -> Any:
        return self._load().get(key)

    def write(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            logger.error(f"Error writing store {self._path}: {e}")
            raise StorageError("Failed to access local storage") from e


class ExpenseStore:
    def __init__(self, backend) -> None:
        self._backend = backend

    def list_expenses(self) -> List[Dict[str, Any]]:
        expenses = self._backend.read(EXPENSES_KEY)
        if not expenses:
            return []
        if not isinstance(expenses, list) or not all(isinstance(e, dict) for e in expenses):
            logger.error(f"Stored '{EXPENSES_KEY}' is not a list of expense objects")
            raise StorageError("Failed to access local storage")
        return list(expenses)

    def get_expense(self, expense_id: str) -> Optional[Dict[str, Any]]:
        for expense in self.list_expenses():
            if expense.get("id") == expense_id:
                return expense
        return None

    def put_expense(self, expense_item: Dict[str, Any]) -> Dict[str, Any]:
        """Insert an expense, or replace the one with the same id."""
        expenses = [e for e in self.list_expenses() if e.get("id") != expense_item["id"]]
        expenses.append(expense_item)
        self._backend.write(EXPENSES_KEY, expenses)
        logger.info(f"Saved expense {expense_item['id']}")
        return expense_item

    def update_expense(self, expense_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Apply partial updates to an expense. Returns the updated item, or
        None when no expense has this id (nothing is written then).
        """
        expenses = self.list_expenses()
        for idx, expense in enumerate(expenses):
            if expense.get("id") == expense_id:
                updated = {**expense, **updates, "updated_at": datetime.utcnow().isoformat()}
                expenses[idx] = updated
                self._backend.write(EXPENSES_KEY, expenses)
                logger.info(f"Updated expense {expense_id}")
                return updated
        return None

    def delete_expense(self, expense_id: str) -> bool:
        expenses = self.list_expenses()
        remaining = [e for e in expenses if e.get("id") != expense_id]
        if len(remaining) == len(expenses):
            return False
        self._backend.write(EXPENSES_KEY, remaining)
        logger.info(f"Deleted expense {expense_id}")
        return True

    def get_settings(self) -> Optional[Dict[str, Any]]:
        saved = self._backend.read(SETTINGS_KEY)
        if saved is not None and not isinstance(saved, dict):
            logger.error(f"Stored '{SETTINGS_KEY}' is not an object")
            raise StorageError("Failed to access local storage")
        return saved

    def save_settings(self, settings_item: Dict[str, Any]) -> Dict[str, Any]:
        self._backend.write(SETTINGS_KEY, settings_item)
        logger.info("Saved user settings")
        return settings_item
