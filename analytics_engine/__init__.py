"""
analytics_engine
~~~~~~~~~~~~~~~~

Framework-free analytics for the expense dashboard. The aggregate functions
are pure: expenses, budget and the reference date are always passed in, and
numeric edge cases (empty input, zero budget, empty comparison month) are
answered with defined values instead of exceptions. ExpenseAnalyzer bundles
them behind one configurable object for the web layer.
"""

from .aggregates import (
    CATEGORIES,
    MONTH_LABELS,
    compute_average_daily,
    compute_budget_health,
    compute_category_totals,
    compute_monthly_totals,
    compute_top_category,
    compute_totals,
    compute_trend,
    filter_by_date_range,
)
from .analyzer import ExpenseAnalyzer
from .insights import (
    CATEGORY_LABELS,
    DEFAULT_THRESHOLDS,
    Insight,
    InsightReport,
    InsightThresholds,
    generate_insights,
)

__all__ = [
    "CATEGORIES",
    "CATEGORY_LABELS",
    "DEFAULT_THRESHOLDS",
    "ExpenseAnalyzer",
    "Insight",
    "InsightReport",
    "InsightThresholds",
    "MONTH_LABELS",
    "compute_average_daily",
    "compute_budget_health",
    "compute_category_totals",
    "compute_monthly_totals",
    "compute_top_category",
    "compute_totals",
    "compute_trend",
    "filter_by_date_range",
    "generate_insights",
]
