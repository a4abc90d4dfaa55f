from analytics_engine.insights import (
    TOP_CATEGORY_SHARE_THRESHOLD,
    TREND_DECREASE_THRESHOLD,
    TREND_INCREASE_THRESHOLD,
    InsightThresholds,
    generate_insights,
)

balanced_totals = {"food": 40, "shopping": 30, "health": 30}


def _by_type(items):
    return {item.type: item for item in items}


def _recommendation(report, kind):
    return _by_type(report.recommendations)[kind]


def test_report_has_fixed_shape():
    report = generate_insights(balanced_totals, 100, 2000, 0.0)
    assert [i.type for i in report.insights] == ["spending_trend", "budget_health", "top_category"]
    assert [r.type for r in report.recommendations] == [
        "budget_adjustment",
        "category_optimization",
        "spending_pattern",
    ]


def test_top_category_share_text():
    report = generate_insights(balanced_totals, 100, 2000, 0.0)
    top = _by_type(report.insights)["top_category"]
    assert top.description == "Food & Dining accounts for 40.0% of your expenses."


def test_share_exactly_at_threshold_is_not_high():
    assert TOP_CATEGORY_SHARE_THRESHOLD == 40.0
    report = generate_insights(balanced_totals, 100, 2000, 0.0)
    rec = _recommendation(report, "category_optimization")
    assert rec.rule == "distributed_spending"
    assert rec.description == "Your spending is well-distributed across categories."


def test_share_above_threshold_is_high():
    report = generate_insights({"food": 40.01, "shopping": 59.99}, 100, 2000, 0.0)
    rec = _recommendation(report, "category_optimization")
    assert rec.rule == "concentrated_spending"
    assert "Shopping is quite high" in rec.description


def test_trend_boundaries():
    assert TREND_INCREASE_THRESHOLD == 10.0
    assert TREND_DECREASE_THRESHOLD == -10.0
    cases = {
        10.0: "stable_spending",
        10.5: "rising_spending",
        -10.0: "stable_spending",
        -10.5: "falling_spending",
    }
    for trend, expected in cases.items():
        report = generate_insights(balanced_totals, 100, 2000, trend)
        assert _recommendation(report, "spending_pattern").rule == expected


def test_trend_direction_text():
    up = _by_type(generate_insights(balanced_totals, 100, 2000, 25.0).insights)["spending_trend"]
    assert up.description == "Your spending has increased by 25.0% compared to last month."
    assert up.tone == "negative"

    down = _by_type(generate_insights(balanced_totals, 100, 2000, -12.34).insights)["spending_trend"]
    assert down.description == "Your spending has decreased by 12.3% compared to last month."

    flat = _by_type(generate_insights(balanced_totals, 100, 2000, 0.0).insights)["spending_trend"]
    assert flat.rule == "trend_flat"


def test_budget_health_text():
    over = generate_insights(balanced_totals, 2500, 2000, 0.0)
    assert _by_type(over.insights)["budget_health"].description == (
        "You've exceeded your monthly budget by 25.0%."
    )
    assert _recommendation(over, "budget_adjustment").rule == "reduce_spending"

    under = generate_insights(balanced_totals, 1000, 2000, 0.0)
    assert _by_type(under.insights)["budget_health"].description == "You're under budget by 50.0%."
    assert _recommendation(under, "budget_adjustment").rule == "start_saving"


def test_zero_budget_with_spending():
    report = generate_insights(balanced_totals, 100, 0, 0.0)
    health = _by_type(report.insights)["budget_health"]
    assert health.rule == "over_budget_no_ratio"
    assert health.description == "You've exceeded your monthly budget."


def test_zero_budget_without_spending():
    report = generate_insights({}, 0, 0, 0.0)
    assert _by_type(report.insights)["budget_health"].description == "You're under budget by 0.0%."


def test_no_data():
    report = generate_insights({}, 0, 2000, 0.0)
    assert _by_type(report.insights)["top_category"].description == "No spending data available."
    assert _recommendation(report, "category_optimization").rule == "distributed_spending"


def test_custom_thresholds():
    strict = InsightThresholds(top_category_share=30.0, trend_increase=5.0, trend_decrease=-5.0)
    report = generate_insights(balanced_totals, 100, 2000, 6.0, thresholds=strict)
    assert _recommendation(report, "category_optimization").rule == "concentrated_spending"
    assert _recommendation(report, "spending_pattern").rule == "rising_spending"


def test_to_dict():
    data = generate_insights(balanced_totals, 100, 2000, 0.0).to_dict()
    assert set(data) == {"insights", "recommendations"}
    assert data["insights"][0] == {
        "type": "spending_trend",
        "title": "Spending Trend",
        "description": "Your spending is unchanged compared to last month.",
        "tone": "neutral",
        "rule": "trend_flat",
    }
