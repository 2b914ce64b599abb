"""
Sales trend and demand volatility over the recent sales window, and the
restock quantity recommendation built on them.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from config.config import DEFAULT_CONFIG, MarkdownEngineConfig
from models.enums import DemandVolatility, SalesTrend
from models.inventory import InventoryPosition, InventoryStatus
from models.pricing import RestockRecommendation
from models.product import Product, as_product
from pricing.temporal import average_daily_sales

logger = logging.getLogger(__name__)

TREND_WINDOW = 3


def sales_trend(history: Sequence[float] | None) -> SalesTrend:
    """Compare the mean of the last three days with the first three."""
    if not history or len(history) < TREND_WINDOW:
        return SalesTrend.STABLE
    recent_avg = float(np.mean(history[-TREND_WINDOW:]))
    earlier_avg = float(np.mean(history[:TREND_WINDOW]))
    if earlier_avg == 0:  # Avoid division by zero
        earlier_avg = 1.0
    ratio = recent_avg / earlier_avg
    if ratio > 1.3:
        return SalesTrend.INCREASING
    elif ratio > 1.1:
        return SalesTrend.SLIGHTLY_INCREASING
    elif ratio < 0.7:
        return SalesTrend.DECREASING
    elif ratio < 0.9:
        return SalesTrend.SLIGHTLY_DECREASING
    return SalesTrend.STABLE


def demand_volatility(history: Sequence[float] | None) -> DemandVolatility:
    """Classify the coefficient of variation (population std / mean) of daily sales."""
    if not history or len(history) < 2:
        return DemandVolatility.LOW
    values = np.asarray(history, dtype=float)
    mean = float(values.mean())
    if mean == 0:
        mean = 1.0
    cv = float(values.std()) / mean
    if cv > 0.5:
        return DemandVolatility.HIGH
    elif cv > 0.3:
        return DemandVolatility.MEDIUM
    return DemandVolatility.LOW


def restock_target_days(product: Product, config: MarkdownEngineConfig = DEFAULT_CONFIG) -> int:
    """Days of cover to order for, never beyond the product's shelf life."""
    shelf_life = product.typical_consumption_days or config.policies.resolve(product.category).max_shelf_life
    return max(1, min(config.restock_target_days, shelf_life))


def restock_recommendation(
    product: Product | Mapping[str, Any], config: MarkdownEngineConfig = DEFAULT_CONFIG
) -> RestockRecommendation:
    """
    Recommend the next batch quantity.

    Orders enough for the target cover at the current velocity, scaled up
    for rising or volatile demand and down for falling demand, with a
    guaranteed minimum order.
    """
    product = as_product(product)
    history = product.sales_last_7_days
    avg_sales = average_daily_sales(history)
    trend = sales_trend(history)
    volatility = demand_volatility(history)
    target_days = restock_target_days(product, config)

    raw_quantity = (
        avg_sales
        * target_days
        * config.trend_multipliers[trend.value]
        * config.volatility_multipliers[volatility.value]
    )
    quantity = max(config.min_order_quantity, math.ceil(raw_quantity))

    position = InventoryPosition(
        product_id=product.id,
        current_stock=product.stock,
        daily_sales_rate=avg_sales,
        target_days=target_days,
    )
    reasoning = (
        f"Based on {avg_sales:.1f} avg daily sales, {target_days} days supply, "
        f"{trend.value.replace('_', ' ')} trend, {volatility.value} volatility"
    )
    if quantity == config.min_order_quantity and raw_quantity < quantity:
        reasoning += f" (minimum order {config.min_order_quantity})"
    logger.debug(f"Restock {product.id}: {quantity} units ({reasoning})")
    return RestockRecommendation(
        product_id=product.id,
        recommended_quantity=quantity,
        reasoning=reasoning,
        current_stock=product.stock,
        stock_status=position.get_status(),
        avg_daily_sales=avg_sales,
        days_of_supply=position.days_of_supply(),
        sales_trend=trend,
        demand_volatility=volatility,
        target_days=target_days,
    )
