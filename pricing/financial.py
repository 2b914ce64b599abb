"""
Financial projection for markdown decisions: discounted price, revenue at
risk if stock expires unsold, and the value given away by discounting.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from models.portfolio import FinancialSummary
from models.pricing import DiscountRecommendation, FinancialProjection
from models.product import Product, as_product
from pricing.temporal import average_daily_sales, days_until_expiry


def discounted_price(price: float, discount_pct: float) -> float:
    return price * (1 - discount_pct / 100)


def potential_loss(
    product: Product | Mapping[str, Any], reference_date: date | datetime | None = None
) -> tuple[float, float]:
    """
    Return (potential_unsold_units, potential_revenue_loss) if the current
    sales velocity continues until expiry. Both values are non-negative.
    """
    product = as_product(product)
    avg_sales = average_daily_sales(product.sales_last_7_days)
    days_to_expiry = days_until_expiry(product.expiry_date, reference_date)
    expected_sales = min(product.stock, avg_sales * max(days_to_expiry, 0))
    unsold = max(0.0, product.stock - expected_sales)
    return unsold, unsold * product.price


def discount_savings(product: Product | Mapping[str, Any], recommendation: DiscountRecommendation) -> float:
    """
    Value of applying the recommended markdown across the full current stock.
    Assumes the whole stock is liquidated at the discounted price.
    """
    product = as_product(product)
    return (product.price - discounted_price(product.price, recommendation.discount)) * product.stock


def financial_projection(
    product: Product | Mapping[str, Any],
    recommendation: DiscountRecommendation,
    reference_date: date | datetime | None = None,
) -> FinancialProjection:
    product = as_product(product)
    unsold, loss = potential_loss(product, reference_date)
    return FinancialProjection(
        discounted_price=discounted_price(product.price, recommendation.discount),
        potential_unsold_units=unsold,
        potential_loss=loss,
        savings=discount_savings(product, recommendation),
    )


def financial_summary(
    product: Product | Mapping[str, Any],
    recommendation: DiscountRecommendation,
    reference_date: date | datetime | None = None,
) -> FinancialSummary:
    """Inventory-value view of a projection, as reported per product in the portfolio."""
    product = as_product(product)
    projection = financial_projection(product, recommendation, reference_date)
    current_value = product.inventory_value
    return FinancialSummary(
        current_value=current_value,
        discounted_price=projection.discounted_price,
        discounted_value=product.stock * projection.discounted_price,
        potential_loss=projection.potential_loss,
        potential_savings=current_value - projection.potential_loss,
        discount_savings=projection.savings,
        potential_unsold_units=projection.potential_unsold_units,
    )
