"""
Demo script for the perishable markdown engine.

Runs a small grocery catalog through the portfolio analysis and logs the
prioritized markdown actions, category risk and insights.
"""

from datetime import date, timedelta

from pricing import MarkdownEngine
from pricing.analytics import discount_distribution
from utils.logger import get_logger

logger = get_logger(__name__)


def sample_catalog(today: date) -> list[dict]:
    """A handful of catalog records in the shape the store catalog exports."""
    return [
        {
            "id": 1,
            "name": "Fresh Milk 500ml",
            "category": "dairy",
            "price": 28,
            "expiry_date": (today + timedelta(days=1)).isoformat(),
            "stock": 120,
            "sales_last_7_days": [25, 32, 18, 28, 35, 22, 30],
            "typical_consumption_days": 2,
            "section": "Dairy & Beverages",
        },
        {
            "id": 2,
            "name": "Set Yogurt 400g",
            "category": "dairy",
            "price": 35,
            "expiry_date": (today - timedelta(days=1)).isoformat(),
            "stock": 14,
            "sales_last_7_days": [8, 12, 6, 10, 14, 7, 11],
            "typical_consumption_days": 3,
            "section": "Dairy & Beverages",
        },
        {
            "id": 3,
            "name": "Sandwich Bread 400g",
            "category": "bakery",
            "price": 25,
            "expiry_date": (today + timedelta(days=2)).isoformat(),
            "stock": 45,
            "sales_last_7_days": [18, 24, 15, 20, 26, 12, 19],
            "typical_consumption_days": 3,
            "section": "Bakery",
        },
        {
            "id": 4,
            "name": "Bananas 1kg",
            "category": "produce",
            "price": 60,
            "expiry_date": (today + timedelta(days=3)).isoformat(),
            "stock": 150,
            "sales_last_7_days": [35, 42, 28, 38, 45, 25, 33],
            "typical_consumption_days": 4,
            "section": "Fruits & Vegetables",
        },
        {
            "id": 5,
            "name": "Basmati Rice 1kg",
            "category": "grains",
            "price": 180,
            "expiry_date": (today + timedelta(days=365)).isoformat(),
            "stock": 120,
            "sales_last_7_days": [12, 15, 8, 13, 17, 9, 11],
            "typical_consumption_days": 365,
            "section": "Rice, Pulses & Grains",
        },
    ]


def run_markdown_demo(today: date | None = None):
    today = today or date.today()
    logger.info("--- Perishable Markdown Engine Demo ---")
    engine = MarkdownEngine.from_env()
    analysis = engine.analyze_portfolio(sample_catalog(today), today)

    for metrics in analysis.products:
        rec = metrics.recommendation
        logger.info(
            f"[{rec.urgency.value:>8}] {metrics.name}: {rec.discount}% off "
            f"({rec.action.value}) - {rec.reason}"
        )
    for category, stats in analysis.categories.items():
        logger.info(f"Category {category}: {stats.status.value} (risk {stats.risk_level:.0%})")
    for insight in analysis.insights:
        logger.info(f"Insight: {insight}")
    logger.info(f"Discount distribution: {discount_distribution(analysis.products)}")
    logger.info("--- Markdown Engine Demo Finished ---")
    return analysis


if __name__ == "__main__":
    run_markdown_demo()
