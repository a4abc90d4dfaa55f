from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from dateutil.relativedelta import relativedelta

CATEGORIES: Tuple[str, ...] = (
    "food",
    "transportation",
    "entertainment",
    "utilities",
    "shopping",
    "health",
    "education",
    "other",
)

# Fixed English labels so bucketing never depends on the process locale.
MONTH_LABELS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DEFAULT_AVERAGE_WINDOW_DAYS = 30

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Expense = Mapping[str, Any]


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    # str() first so floats keep their printed value instead of binary noise
    return Decimal(str(value))


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def expense_date(expense: Expense) -> date:
    value = expense["date"]
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _sum_amounts(expenses: Iterable[Expense]) -> Decimal:
    return sum((to_decimal(exp.get("amount")) for exp in expenses), ZERO)


def filter_by_date_range(
    expenses: Iterable[Expense],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Expense]:
    """Keep expenses dated within ``[start, end]``; a missing bound is open."""
    selected = []
    for exp in expenses:
        day = expense_date(exp)
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        selected.append(exp)
    return selected


def compute_totals(expenses: Iterable[Expense]) -> Decimal:
    return quantize(_sum_amounts(expenses))


def compute_category_totals(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = {}
    for exp in expenses:
        category = exp["category"]
        totals[category] = totals.get(category, ZERO) + to_decimal(exp.get("amount"))
    return {cat: quantize(total) for cat, total in totals.items()}


def compute_top_category(
    category_totals: Mapping[str, Any],
) -> Optional[Tuple[str, Decimal]]:
    """
    Return ``(category, total)`` for the largest category, or ``None`` when
    there is no data. Exact ties keep the category seen first.
    """
    top: Optional[Tuple[str, Decimal]] = None
    for category, total in category_totals.items():
        amount = to_decimal(total)
        if top is None or amount > top[1]:
            top = (category, amount)
    return top


def compute_category_shares(
    category_totals: Mapping[str, Any],
    total_expenses: Any,
) -> Dict[str, float]:
    total = to_decimal(total_expenses)
    if total <= 0:
        return {cat: 0.0 for cat in category_totals}
    return {
        cat: float(to_decimal(amount) / total * 100)
        for cat, amount in category_totals.items()
    }


def compute_monthly_totals(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    """
    Bucket spend by calendar month name. The year is ignored, so every
    January lands in ``"Jan"``. All twelve months are always present.
    """
    buckets: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for exp in expenses:
        label = MONTH_LABELS[expense_date(exp).month - 1]
        buckets[label] += to_decimal(exp.get("amount"))
    return {label: quantize(buckets[label]) for label in MONTH_LABELS}


def compute_window_totals(
    expenses: Iterable[Expense],
    now: date,
) -> Tuple[Decimal, Decimal]:
    """
    Totals for the last month ``[now - 1 month, now]`` and the month before
    it ``[now - 2 months, now - 1 month)``. Dates carry no time of day, so
    expenses dated ``now`` count towards the last month.
    """
    one_month_ago = now - relativedelta(months=1)
    two_months_ago = now - relativedelta(months=2)

    last_month = ZERO
    previous_month = ZERO
    for exp in expenses:
        day = expense_date(exp)
        if one_month_ago <= day <= now:
            last_month += to_decimal(exp.get("amount"))
        elif two_months_ago <= day < one_month_ago:
            previous_month += to_decimal(exp.get("amount"))
    return quantize(last_month), quantize(previous_month)


def compute_trend(expenses: Iterable[Expense], now: date) -> float:
    last_month, previous_month = compute_window_totals(expenses, now)
    if previous_month == 0:
        return 0.0
    return float((last_month - previous_month) / previous_month * 100)


def compute_budget_health(total_expenses: Any, budget: Any) -> Optional[float]:
    """
    Signed percentage of spend over (positive) or under (negative) budget.

    A zero budget has no ratio: it is ``0.0`` when nothing was spent and
    ``None`` (over budget, undefined ratio) otherwise.
    """
    total = to_decimal(total_expenses)
    ceiling = to_decimal(budget)
    if ceiling == 0:
        return 0.0 if total == 0 else None
    return float((total - ceiling) / ceiling * 100)


def compute_average_daily(
    expenses: Iterable[Expense],
    now: date,
    window_days: int = DEFAULT_AVERAGE_WINDOW_DAYS,
) -> Decimal:
    """Spend per calendar day over the trailing window, not per transaction."""
    if window_days <= 0:
        return ZERO
    since = now - timedelta(days=window_days)
    recent = _sum_amounts(exp for exp in expenses if expense_date(exp) >= since)
    return quantize(recent / window_days)


def compute_average_expense(expenses: Iterable[Expense]) -> Decimal:
    items = list(expenses)
    return quantize(_sum_amounts(items) / max(len(items), 1))


def compute_budget_remaining(total_expenses: Any, budget: Any) -> Tuple[Decimal, float]:
    total = to_decimal(total_expenses)
    ceiling = to_decimal(budget)
    remaining = max(ceiling - total, ZERO)
    if ceiling == 0:
        return quantize(remaining), 0.0
    return quantize(remaining), float(remaining / ceiling * 100)
