"""
Analytics Router
Dashboard aggregates and templated insights computed from the stored expenses
"""
import logging
from datetime import date
from typing import Any, Dict

from fastapi import APIRouter, Depends

from analytics_engine import ExpenseAnalyzer
from expense_dashboard.core.dependencies import DateRange, get_analyzer, get_store, load_user_settings
from expense_dashboard.db.store import ExpenseStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/summary")
def get_summary(
    date_range: DateRange = Depends(),
    store: ExpenseStore = Depends(get_store),
    user_settings: Dict[str, Any] = Depends(load_user_settings),
    analyzer: ExpenseAnalyzer = Depends(get_analyzer),
):
    """
    Totals, category and monthly breakdowns, trend, budget health and
    insights. ``start``/``end`` (YYYY-MM-DD, inclusive) restrict the expenses
    considered.
    """
    expenses = store.list_expenses()
    summary = analyzer.summarize(
        expenses,
        budget=user_settings["budget"],
        now=date.today(),
        start=date_range.start,
        end=date_range.end,
    )
    logger.debug(f"Summary over {summary['expense_count']} expenses: total={summary['total_expenses']}")
    return summary


@router.get("/insights")
def get_insights(
    date_range: DateRange = Depends(),
    store: ExpenseStore = Depends(get_store),
    user_settings: Dict[str, Any] = Depends(load_user_settings),
    analyzer: ExpenseAnalyzer = Depends(get_analyzer),
):
    expenses = analyzer.filter_by_date_range(
        store.list_expenses(), date_range.start, date_range.end
    )
    total = analyzer.compute_totals(expenses)
    report = analyzer.generate_insights(
        analyzer.compute_category_totals(expenses),
        total,
        user_settings["budget"],
        analyzer.compute_trend(expenses, date.today()),
    )
    return report.to_dict()
