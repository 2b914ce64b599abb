"""
Seasonal adjustment layered on top of the discount calculator.

High seasonal or weekday demand means less markdown is needed to move
stock; slack demand means more.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from config.config import DEFAULT_CONFIG, MarkdownEngineConfig, SeasonalConfig
from models.pricing import SeasonalRecommendation
from models.product import Product, as_product
from pricing.discount import clamp, discount_recommendation, round_half_up
from pricing.temporal import resolve_reference_date

logger = logging.getLogger(__name__)


def day_of_week_index(reference: date | datetime) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return reference.isoweekday() % 7


def seasonal_factors(
    category: str | None,
    reference_date: date | datetime | None = None,
    seasonal: SeasonalConfig = DEFAULT_CONFIG.seasonal,
) -> tuple[float, float]:
    """Return the (month_factor, day_factor) demand indices for a category and date."""
    reference = resolve_reference_date(reference_date)
    month_factor = seasonal.month_factor(category, reference.month)
    day_factor = seasonal.day_factor(day_of_week_index(reference))
    return month_factor, day_factor


def adjustment_factor(
    month_factor: float, day_factor: float, seasonal: SeasonalConfig = DEFAULT_CONFIG.seasonal
) -> float:
    factor = 1.0
    if month_factor > seasonal.high_month_demand:
        factor *= 0.8
    elif month_factor < seasonal.low_month_demand:
        factor *= 1.2
    if day_factor > seasonal.high_day_demand:
        factor *= 0.9
    elif day_factor < seasonal.low_day_demand:
        factor *= 1.1
    return factor


def seasonal_adjustment(
    base_discount: int,
    category: str | None,
    reference_date: date | datetime | None = None,
    seasonal: SeasonalConfig = DEFAULT_CONFIG.seasonal,
) -> int:
    """Scale a discount by month and day-of-week demand, rounded to a whole percent."""
    month_factor, day_factor = seasonal_factors(category, reference_date, seasonal)
    return round_half_up(base_discount * adjustment_factor(month_factor, day_factor, seasonal))


def seasonal_recommendation(
    product: Product | Mapping[str, Any],
    reference_date: date | datetime | None = None,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> SeasonalRecommendation:
    """
    Discount recommendation with the seasonal adjustment applied.

    Both the pre- and post-adjustment discount are exposed; the reason gains
    a note when they differ. The result stays within the category's hard
    discount ceiling.
    """
    product = as_product(product)
    reference = resolve_reference_date(reference_date)
    base = discount_recommendation(product, reference, config)
    month_factor, day_factor = seasonal_factors(product.category, reference, config.seasonal)
    factor = adjustment_factor(month_factor, day_factor, config.seasonal)

    policy = config.policies.resolve(product.category)
    adjusted = clamp(round_half_up(base.discount * factor), 0, config.discount_ceiling(policy))
    reason = base.reason
    if adjusted != base.discount:
        reason = f"{reason}; seasonal adjustment {base.discount}% -> {adjusted}%"
        logger.debug(f"Seasonal adjustment for {product.id}: {base.discount}% -> {adjusted}% (x{factor:.2f})")

    return SeasonalRecommendation(
        discount=adjusted,
        urgency=base.urgency,
        action=base.action,
        reason=reason,
        analytics=base.analytics,
        base_discount=base.discount,
        adjustment_factor=factor,
        month_factor=month_factor,
        day_factor=day_factor,
    )
