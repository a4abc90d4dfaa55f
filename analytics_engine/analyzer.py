from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from . import aggregates
from .aggregates import DEFAULT_AVERAGE_WINDOW_DAYS, Expense
from .insights import DEFAULT_THRESHOLDS, InsightReport, InsightThresholds, generate_insights


class ExpenseAnalyzer:
    """
    Dashboard analytics over a list of expense records.

    Holds only configuration (insight thresholds and the averaging window);
    expenses, budget and the reference date are passed into every call so
    the same analyzer can serve any number of callers.
    """

    def __init__(
        self,
        thresholds: Optional[InsightThresholds] = None,
        average_window_days: int = DEFAULT_AVERAGE_WINDOW_DAYS,
    ) -> None:
        self._thresholds = thresholds or DEFAULT_THRESHOLDS
        self._average_window_days = average_window_days

    @property
    def thresholds(self) -> InsightThresholds:
        return self._thresholds

    def filter_by_date_range(
        self,
        expenses: Iterable[Expense],
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Expense]:
        return aggregates.filter_by_date_range(expenses, start, end)

    def compute_totals(self, expenses: Iterable[Expense]) -> Decimal:
        return aggregates.compute_totals(expenses)

    def compute_category_totals(self, expenses: Iterable[Expense]) -> Dict[str, Decimal]:
        return aggregates.compute_category_totals(expenses)

    def compute_top_category(
        self, category_totals: Mapping[str, Any]
    ) -> Optional[Tuple[str, Decimal]]:
        return aggregates.compute_top_category(category_totals)

    def compute_monthly_totals(self, expenses: Iterable[Expense]) -> Dict[str, Decimal]:
        return aggregates.compute_monthly_totals(expenses)

    def compute_trend(self, expenses: Iterable[Expense], now: date) -> float:
        return aggregates.compute_trend(expenses, now)

    def compute_budget_health(self, total_expenses: Any, budget: Any) -> Optional[float]:
        return aggregates.compute_budget_health(total_expenses, budget)

    def compute_average_daily(
        self,
        expenses: Iterable[Expense],
        now: date,
        window_days: Optional[int] = None,
    ) -> Decimal:
        if window_days is None:
            window_days = self._average_window_days
        return aggregates.compute_average_daily(expenses, now, window_days)

    def generate_insights(
        self,
        category_totals: Mapping[str, Any],
        total_expenses: Any,
        budget: Any,
        trend: float,
    ) -> InsightReport:
        return generate_insights(
            category_totals, total_expenses, budget, trend, self._thresholds
        )

    def summarize(
        self,
        expenses: Iterable[Expense],
        budget: Any,
        now: date,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Every dashboard aggregate for ``expenses`` in one dictionary.

        The optional ``start``/``end`` range (inclusive) is applied first;
        trend and average-daily windows are then measured back from ``now``
        over the filtered records.
        """
        selected = self.filter_by_date_range(expenses, start, end)

        total = self.compute_totals(selected)
        category_totals = self.compute_category_totals(selected)
        top = self.compute_top_category(category_totals)
        last_month, previous_month = aggregates.compute_window_totals(selected, now)
        trend = self.compute_trend(selected, now)
        remaining, percent_left = aggregates.compute_budget_remaining(total, budget)

        return {
            "expense_count": len(selected),
            "total_expenses": total,
            "average_expense": aggregates.compute_average_expense(selected),
            "category_totals": category_totals,
            "category_shares": aggregates.compute_category_shares(category_totals, total),
            "top_category": (
                {"category": top[0], "total": top[1]} if top is not None else None
            ),
            "monthly_totals": self.compute_monthly_totals(selected),
            "last_month_total": last_month,
            "previous_month_total": previous_month,
            "spending_trend": trend,
            "average_daily": self.compute_average_daily(selected, now),
            "budget": aggregates.to_decimal(budget),
            "budget_health": self.compute_budget_health(total, budget),
            "budget_remaining": remaining,
            "budget_percent_left": percent_left,
            "insights": self.generate_insights(category_totals, total, budget, trend).to_dict(),
        }
