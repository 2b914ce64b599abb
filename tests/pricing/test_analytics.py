import pytest

from config.config import DEFAULT_CATEGORY, CategoryPolicy, MarkdownEngineConfig, PolicyTable
from pricing.analytics import (
    METRIC_COLUMNS,
    discount_distribution,
    expiry_timeline,
    metrics_frame,
    urgency_breakdown,
)
from pricing.portfolio import performance_metrics


@pytest.fixture
def metrics(catalog, reference_date):
    config = MarkdownEngineConfig(apply_seasonality=False)
    return [performance_metrics(p, reference_date, config) for p in catalog]


def test_metrics_frame(metrics):
    df = metrics_frame(metrics)
    assert list(df.columns) == METRIC_COLUMNS
    assert len(df) == 5
    assert df.loc[df["product_id"] == "critical", "discount"].item() == 42


def test_metrics_frame_empty():
    df = metrics_frame([])
    assert list(df.columns) == METRIC_COLUMNS
    assert df.empty


def test_urgency_breakdown(metrics):
    breakdown = urgency_breakdown(metrics)
    assert [row["urgency"] for row in breakdown] == ["critical", "high", "none"]
    assert [row["count"] for row in breakdown] == [1, 2, 1 + 1]
    assert breakdown[-1]["savings"] == 0


def test_discount_distribution(metrics):
    distribution = {row["range"]: row["count"] for row in discount_distribution(metrics)}
    assert distribution == {"0%": 2, "1-10%": 0, "11-25%": 0, "26-40%": 0, "41-50%": 1, "50%+": 2}


def test_expiry_timeline(metrics):
    timeline = expiry_timeline(metrics)
    assert len(timeline) == 15
    assert [row["label"] for row in timeline[:3]] == ["Today", "Tomorrow", "2 days"]
    assert timeline[0]["count"] == 0
    assert timeline[1]["count"] == 1
    assert timeline[2]["count"] == 2
    assert timeline[2]["total_value"] == pytest.approx(700)
    assert timeline[9]["count"] == 2


def test_expiry_timeline_horizon(metrics):
    assert len(expiry_timeline(metrics, horizon=3)) == 4


def test_discount_distribution_counts_discounts_above_100(make_product, reference_date):
    policies = PolicyTable(
        {"flowers": CategoryPolicy(4, 0.5, 0.25, 95), DEFAULT_CATEGORY: CategoryPolicy(30, 0.2, 0.1, 40)}
    )
    config = MarkdownEngineConfig(policies=policies, apply_seasonality=False)
    metrics = [performance_metrics(make_product(-1, category="flowers"), reference_date, config)]
    assert metrics[0].discount == 105
    distribution = {row["range"]: row["count"] for row in discount_distribution(metrics)}
    assert distribution["50%+"] == 1
    assert sum(distribution.values()) == 1
