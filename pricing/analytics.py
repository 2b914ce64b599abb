"""
Dashboard rollups over per-product performance metrics: urgency breakdown,
discount distribution and the expiry timeline.
"""

from collections.abc import Iterable

import pandas as pd

from models.portfolio import PerformanceMetrics
from pricing.portfolio import URGENCY_ORDER

METRIC_COLUMNS = [
    "product_id",
    "name",
    "category",
    "price",
    "stock",
    "days_to_expiry",
    "discount",
    "urgency",
    "action",
    "current_value",
    "discounted_price",
    "potential_loss",
    "discount_savings",
    "performance_score",
]

# (label, lowest discount, highest discount), inclusive; the last bucket is open-ended
DISCOUNT_BUCKETS = [
    ("0%", 0, 0),
    ("1-10%", 1, 10),
    ("11-25%", 11, 25),
    ("26-40%", 26, 40),
    ("41-50%", 41, 50),
    ("50%+", 51, float("inf")),
]


def metrics_frame(metrics: Iterable[PerformanceMetrics]) -> pd.DataFrame:
    """One row per product with the fields the dashboard charts use."""
    rows = [
        {
            "product_id": m.product_id,
            "name": m.name,
            "category": m.category,
            "price": m.price,
            "stock": m.stock,
            "days_to_expiry": m.days_to_expiry,
            "discount": m.discount,
            "urgency": m.urgency.value,
            "action": m.recommendation.action.value,
            "current_value": m.financials.current_value,
            "discounted_price": m.financials.discounted_price,
            "potential_loss": m.financials.potential_loss,
            "discount_savings": m.financials.discount_savings,
            "performance_score": m.performance_score,
        }
        for m in metrics
    ]
    return pd.DataFrame(rows, columns=METRIC_COLUMNS)


def urgency_breakdown(metrics: Iterable[PerformanceMetrics]) -> list[dict]:
    """Product count and discount savings per urgency tier, most urgent first, empty tiers omitted."""
    df = metrics_frame(metrics)
    grouped = df.groupby("urgency").agg(count=("product_id", "size"), savings=("discount_savings", "sum"))
    breakdown = []
    for urgency in URGENCY_ORDER:
        if urgency.value not in grouped.index:
            continue
        row = grouped.loc[urgency.value]
        breakdown.append({"urgency": urgency.value, "count": int(row["count"]), "savings": float(row["savings"])})
    return breakdown


def discount_distribution(metrics: Iterable[PerformanceMetrics]) -> list[dict]:
    df = metrics_frame(metrics)
    return [
        {"range": label, "count": int(df["discount"].between(low, high).sum())}
        for label, low, high in DISCOUNT_BUCKETS
    ]


def _day_label(day: int) -> str:
    if day == 0:
        return "Today"
    if day == 1:
        return "Tomorrow"
    return f"{day} days"


def expiry_timeline(metrics: Iterable[PerformanceMetrics], horizon: int = 14) -> list[dict]:
    """Products, stock value and discount savings expiring on each day from today to the horizon."""
    df = metrics_frame(metrics)
    timeline = []
    for day in range(horizon + 1):
        due = df[df["days_to_expiry"] == day]
        timeline.append(
            {
                "day": day,
                "label": _day_label(day),
                "count": int(len(due)),
                "total_value": float(due["current_value"].sum()),
                "potential_savings": float(due["discount_savings"].sum()),
            }
        )
    return timeline
