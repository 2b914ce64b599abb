import pytest
from pydantic import ValidationError

from config.config import MarkdownEngineConfig
from models.enums import DemandVolatility, MarkdownAction, RiskStatus, SalesTrend, Urgency
from models.inventory import InventoryStatus
from pricing.portfolio import (
    analyze_portfolio,
    category_insights,
    performance_metrics,
    performance_score,
    prioritize,
    risk_status,
)

NO_SEASONALITY = MarkdownEngineConfig(apply_seasonality=False)


def _ids(metrics):
    return [m.product_id for m in metrics]


@pytest.mark.parametrize(
    "urgency, trend, volatility, status, expected",
    [
        (Urgency.NONE, SalesTrend.STABLE, DemandVolatility.LOW, InventoryStatus.ADEQUATE, 100),
        (Urgency.HIGH, SalesTrend.SLIGHTLY_DECREASING, DemandVolatility.MEDIUM, InventoryStatus.EXCESS, 40),
        (Urgency.CRITICAL, SalesTrend.DECREASING, DemandVolatility.HIGH, InventoryStatus.CRITICAL, 0),
    ],
)
def test_performance_score(urgency, trend, volatility, status, expected):
    assert performance_score(urgency, trend, volatility, status) == expected


def test_performance_metrics_for_critical_product(make_product, reference_date):
    product = make_product(1, id="milk", typical_consumption_days=7, stock=10, sales_last_7_days=[10] * 7)
    metrics = performance_metrics(product, reference_date, NO_SEASONALITY)
    assert metrics.product_id == "milk"
    assert metrics.days_to_expiry == 1
    assert metrics.discount == 42
    assert metrics.urgency == Urgency.CRITICAL
    assert metrics.stock_status == InventoryStatus.LOW
    assert metrics.performance_score == 60
    assert metrics.financials.current_value == 100
    assert metrics.action_plan.priority == 1
    assert metrics.action_plan.steps == [
        "Apply 42% markdown immediately",
        "Move to the front of the display",
        "Reorder 70 units",
    ]


def test_performance_metrics_applies_seasonality_by_default(make_product, reference_date):
    product = make_product(1, typical_consumption_days=7, stock=10, sales_last_7_days=[10] * 7)
    metrics = performance_metrics(product, reference_date)
    assert metrics.recommendation.base_discount == 42
    assert metrics.discount == 34


def test_expired_product_plan_skips_reorder(make_product, reference_date):
    metrics = performance_metrics(make_product(-1, stock=10), reference_date, NO_SEASONALITY)
    assert metrics.action_plan.primary_action == MarkdownAction.IMMEDIATE_CLEARANCE
    assert metrics.action_plan.steps == ["Move stock to the clearance display at 60% off"]


def test_prioritize_orders_by_urgency_then_loss(catalog, reference_date):
    analysis = analyze_portfolio(catalog, reference_date)
    assert _ids(analysis.products) == ["critical", "slow-big", "slow-small", "fresh-a", "fresh-b"]


def test_prioritize_keeps_input_order_for_ties(catalog, reference_date):
    analysis = analyze_portfolio(list(reversed(catalog)), reference_date)
    assert _ids(analysis.products)[-2:] == ["fresh-b", "fresh-a"]
    metrics = [performance_metrics(p, reference_date) for p in catalog]
    assert _ids(prioritize(metrics)) == _ids(prioritize(prioritize(metrics)))


def test_portfolio_buckets(catalog, reference_date):
    analysis = analyze_portfolio(catalog, reference_date)
    assert _ids(analysis.immediate_action) == ["critical", "slow-big", "slow-small"]
    assert analysis.monitor == []
    assert _ids(analysis.stable) == ["fresh-a", "fresh-b"]


def test_portfolio_summary(catalog, reference_date):
    analysis = analyze_portfolio(catalog, reference_date)
    summary = analysis.summary
    assert summary.total_products == 5
    assert summary.total_inventory_value == pytest.approx(840)
    assert summary.total_potential_loss == pytest.approx(700)
    assert summary.urgency_distribution == {"critical": 1, "high": 2, "medium": 0, "low": 0, "none": 2}
    assert summary.discounted_product_count == 3
    at_stake = summary.total_discount_savings + summary.total_potential_loss
    assert summary.waste_reduction_percent == pytest.approx(summary.total_discount_savings / at_stake * 100)


def test_category_rollup(catalog, reference_date):
    categories = analyze_portfolio(catalog, reference_date).categories
    assert list(categories) == ["produce", "dairy"]
    dairy = categories["dairy"]
    assert dairy.product_count == 3
    assert dairy.critical_or_high_count == 3
    assert dairy.risk_level == 1.0
    assert dairy.status == RiskStatus.HIGH
    assert dairy.immediate_action == ["critical", "slow-big", "slow-small"]
    produce = categories["produce"]
    assert produce.status == RiskStatus.LOW
    assert produce.stable == ["fresh-a", "fresh-b"]
    assert produce.average_discount == 0


@pytest.mark.parametrize(
    "risk_level, expected",
    [(0.0, RiskStatus.LOW), (0.2, RiskStatus.LOW), (0.3, RiskStatus.MEDIUM), (0.4, RiskStatus.MEDIUM), (0.5, RiskStatus.HIGH)],
)
def test_risk_status(risk_level, expected):
    assert risk_status(risk_level) == expected


def test_category_insights_matches_portfolio_rollup(catalog, reference_date):
    insights = category_insights(catalog, reference_date)
    analysis = analyze_portfolio(catalog, reference_date)
    assert insights == analysis.categories


def test_insights_flag_immediate_action(catalog, reference_date):
    insights = analyze_portfolio(catalog, reference_date).insights
    assert insights[0].startswith("3 product(s) need immediate markdown action")
    assert any("'dairy' is the highest-risk category" in i for i in insights)
    assert "Inventory is healthy; no immediate markdowns required." not in insights


def test_insights_for_healthy_inventory(catalog, reference_date):
    insights = analyze_portfolio([catalog[0]], reference_date).insights
    assert "Inventory is healthy; no immediate markdowns required." in insights


def test_empty_portfolio(reference_date):
    analysis = analyze_portfolio([], reference_date)
    assert analysis.products == []
    assert analysis.categories == {}
    assert analysis.summary.total_products == 0
    assert analysis.summary.waste_reduction_percent == 0
    assert analysis.insights == ["No products to analyze."]


def test_invalid_record_fails_whole_batch(catalog, reference_date):
    bad = {"id": "bad", "name": "x", "category": "dairy", "price": 5, "expiry_date": "2025-06-30", "stock": -1}
    with pytest.raises(ValidationError):
        analyze_portfolio([*catalog, bad], reference_date)


def test_analysis_to_dict(catalog, reference_date):
    data = analyze_portfolio(catalog, reference_date).to_dict()
    assert data["reference_date"] == "2025-06-25"
    assert len(data["products"]) == 5
    assert data["products"][0]["recommendation"]["urgency"] == "critical"
