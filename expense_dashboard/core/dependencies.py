"""
Shared FastAPI dependencies.

Routers never touch module-level state for data: the store and analyzer are
injected here, and tests swap the store for one backed by memory.
"""
from datetime import date
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Query

from analytics_engine import ExpenseAnalyzer
from expense_dashboard.core.config import settings
from expense_dashboard.db.store import ExpenseStore, JsonFileBackend


def get_store() -> ExpenseStore:
    return ExpenseStore(JsonFileBackend(settings.STORE_PATH))


@lru_cache()
def get_analyzer() -> ExpenseAnalyzer:
    return ExpenseAnalyzer(
        thresholds=settings.insight_thresholds(),
        average_window_days=settings.AVERAGE_WINDOW_DAYS,
    )


def default_user_settings() -> Dict[str, Any]:
    return {
        "budget": settings.DEFAULT_BUDGET,
        "currency": settings.DEFAULT_CURRENCY,
        "theme": "system",
        "notifications": True,
    }


def load_user_settings(store: ExpenseStore = Depends(get_store)) -> Dict[str, Any]:
    """Saved settings merged over the defaults."""
    saved = store.get_settings() or {}
    return {**default_user_settings(), **saved}


class DateRange:
    """Optional inclusive ``start``/``end`` query filter."""

    def __init__(
        self,
        start: Optional[date] = Query(default=None),
        end: Optional[date] = Query(default=None),
    ) -> None:
        if start is not None and end is not None and start > end:
            raise HTTPException(status_code=400, detail="start must not be after end")
        self.start = start
        self.end = end
