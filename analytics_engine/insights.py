"""
Threshold-gated insight templates.

Nothing here is learned: each message comes from an ordered rule table
(condition -> template) evaluated over aggregates computed in
:mod:`analytics_engine.aggregates`.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .aggregates import compute_budget_health, compute_top_category, to_decimal

TOP_CATEGORY_SHARE_THRESHOLD = 40.0
TREND_INCREASE_THRESHOLD = 10.0
TREND_DECREASE_THRESHOLD = -10.0

CATEGORY_LABELS: Dict[str, str] = {
    "food": "Food & Dining",
    "transportation": "Transportation",
    "entertainment": "Entertainment",
    "utilities": "Utilities",
    "shopping": "Shopping",
    "health": "Health & Medical",
    "education": "Education",
    "other": "Other",
}


@dataclass(frozen=True)
class InsightThresholds:
    top_category_share: float = TOP_CATEGORY_SHARE_THRESHOLD
    trend_increase: float = TREND_INCREASE_THRESHOLD
    trend_decrease: float = TREND_DECREASE_THRESHOLD


DEFAULT_THRESHOLDS = InsightThresholds()


@dataclass(frozen=True)
class InsightContext:
    """Numbers the templates are rendered from."""

    total_expenses: Decimal
    budget: Decimal
    trend: float
    budget_health: Optional[float]
    top_category: Optional[str]
    top_category_share: float
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS

    @property
    def over_budget(self) -> bool:
        return self.total_expenses > self.budget

    @property
    def top_category_label(self) -> str:
        if self.top_category is None:
            return "Unknown"
        return category_label(self.top_category)


@dataclass(frozen=True)
class Rule:
    name: str
    applies: Callable[[InsightContext], bool]
    template: str
    tone: str = "neutral"

    def render(self, ctx: InsightContext) -> str:
        return self.template.format(
            trend=abs(ctx.trend),
            health=abs(ctx.budget_health) if ctx.budget_health is not None else 0.0,
            share=ctx.top_category_share,
            category=ctx.top_category_label,
        )


@dataclass
class Insight:
    type: str
    title: str
    description: str
    tone: str = "neutral"
    rule: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class InsightReport:
    insights: List[Insight] = field(default_factory=list)
    recommendations: List[Insight] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "insights": [item.to_dict() for item in self.insights],
            "recommendations": [item.to_dict() for item in self.recommendations],
        }


def _always(ctx: InsightContext) -> bool:
    return True


INSIGHT_RULES: Tuple[Tuple[str, str, Tuple[Rule, ...]], ...] = (
    (
        "spending_trend",
        "Spending Trend",
        (
            Rule(
                "trend_up",
                lambda ctx: ctx.trend > 0,
                "Your spending has increased by {trend:.1f}% compared to last month.",
                tone="negative",
            ),
            Rule(
                "trend_down",
                lambda ctx: ctx.trend < 0,
                "Your spending has decreased by {trend:.1f}% compared to last month.",
                tone="positive",
            ),
            Rule(
                "trend_flat",
                _always,
                "Your spending is unchanged compared to last month.",
            ),
        ),
    ),
    (
        "budget_health",
        "Budget Health",
        (
            Rule(
                "over_budget_no_ratio",
                lambda ctx: ctx.over_budget and ctx.budget_health is None,
                "You've exceeded your monthly budget.",
                tone="negative",
            ),
            Rule(
                "over_budget",
                lambda ctx: ctx.over_budget,
                "You've exceeded your monthly budget by {health:.1f}%.",
                tone="negative",
            ),
            Rule(
                "under_budget",
                _always,
                "You're under budget by {health:.1f}%.",
                tone="positive",
            ),
        ),
    ),
    (
        "top_category",
        "Top Spending Category",
        (
            Rule(
                "top_category_share",
                lambda ctx: ctx.top_category is not None,
                "{category} accounts for {share:.1f}% of your expenses.",
            ),
            Rule("no_data", _always, "No spending data available."),
        ),
    ),
)

RECOMMENDATION_RULES: Tuple[Tuple[str, str, Tuple[Rule, ...]], ...] = (
    (
        "budget_adjustment",
        "Budget Adjustment",
        (
            Rule(
                "reduce_spending",
                lambda ctx: ctx.over_budget,
                "Consider increasing your monthly budget or reducing expenses "
                "in high-spending categories.",
                tone="negative",
            ),
            Rule(
                "start_saving",
                _always,
                "You're managing your budget well. Consider setting aside some savings.",
                tone="positive",
            ),
        ),
    ),
    (
        "category_optimization",
        "Category Optimization",
        (
            Rule(
                "concentrated_spending",
                lambda ctx: ctx.top_category is not None
                and ctx.top_category_share > ctx.thresholds.top_category_share,
                "Your spending in {category} is quite high. Look for ways to "
                "optimize expenses in this category.",
                tone="negative",
            ),
            Rule(
                "distributed_spending",
                _always,
                "Your spending is well-distributed across categories.",
                tone="positive",
            ),
        ),
    ),
    (
        "spending_pattern",
        "Spending Pattern",
        (
            Rule(
                "rising_spending",
                lambda ctx: ctx.trend > ctx.thresholds.trend_increase,
                "Your spending is increasing significantly. Review your recent "
                "expenses to identify areas for cost reduction.",
                tone="negative",
            ),
            Rule(
                "falling_spending",
                lambda ctx: ctx.trend < ctx.thresholds.trend_decrease,
                "Great job reducing your expenses! Keep up the good work.",
                tone="positive",
            ),
            Rule(
                "stable_spending",
                _always,
                "Your spending is relatively stable. Continue monitoring your expenses.",
            ),
        ),
    ),
)


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category.title())


def _first_match(rules: Tuple[Rule, ...], ctx: InsightContext) -> Rule:
    for rule in rules:
        if rule.applies(ctx):
            return rule
    # every table ends with a catch-all
    raise LookupError("rule table has no matching rule")


def _evaluate(table, ctx: InsightContext) -> List[Insight]:
    results = []
    for kind, title, rules in table:
        rule = _first_match(rules, ctx)
        results.append(
            Insight(
                type=kind,
                title=title,
                description=rule.render(ctx),
                tone=rule.tone,
                rule=rule.name,
            )
        )
    return results


def build_context(
    category_totals: Mapping[str, Any],
    total_expenses: Any,
    budget: Any,
    trend: float,
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> InsightContext:
    total = to_decimal(total_expenses)
    top = compute_top_category(category_totals)
    if top is not None and total > 0:
        share = float(top[1] / total * 100)
    else:
        share = 0.0
    return InsightContext(
        total_expenses=total,
        budget=to_decimal(budget),
        trend=trend,
        budget_health=compute_budget_health(total, budget),
        top_category=top[0] if top is not None else None,
        top_category_share=share,
        thresholds=thresholds,
    )


def generate_insights(
    category_totals: Mapping[str, Any],
    total_expenses: Any,
    budget: Any,
    trend: float,
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> InsightReport:
    """
    Map the aggregates to the fixed set of insight and recommendation
    messages. Every rule group yields exactly one message.
    """
    ctx = build_context(category_totals, total_expenses, budget, trend, thresholds)
    return InsightReport(
        insights=_evaluate(INSIGHT_RULES, ctx),
        recommendations=_evaluate(RECOMMENDATION_RULES, ctx),
    )
