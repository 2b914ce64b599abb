"""
Discount calculator: turns a product snapshot and a reference date into a
markdown percentage, an urgency tier, a store action and a readable reason.
"""

import logging
import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from config.config import DEFAULT_CONFIG, CategoryPolicy, MarkdownEngineConfig
from models.enums import MarkdownAction, ShelfLifeStage, StockPressure, Urgency
from models.pricing import DiscountAnalytics, DiscountRecommendation
from models.product import Product, as_product
from pricing.classifiers import shelf_life_ratio, shelf_life_stage, stock_pressure
from pricing.temporal import (
    UNBOUNDED_DAYS,
    average_daily_sales,
    days_to_sell_stock,
    days_until_expiry,
    is_unbounded,
)

logger = logging.getLogger(__name__)

FRESH_LOW_STOCK_REASON = "Fresh product with low stock — no discount needed"

STAGE_TIERS: dict[ShelfLifeStage, tuple[Urgency, MarkdownAction]] = {
    ShelfLifeStage.EXPIRED: (Urgency.CRITICAL, MarkdownAction.IMMEDIATE_CLEARANCE),
    ShelfLifeStage.CRITICAL: (Urgency.CRITICAL, MarkdownAction.APPLY_IMMEDIATELY),
    ShelfLifeStage.URGENT: (Urgency.HIGH, MarkdownAction.APPLY_TODAY),
    ShelfLifeStage.MEDIUM: (Urgency.MEDIUM, MarkdownAction.SCHEDULE_DISCOUNT),
    ShelfLifeStage.FRESH: (Urgency.NONE, MarkdownAction.MONITOR),
}

# Pressure can create urgency where expiry alone would not.
PRESSURE_ESCALATIONS: dict[tuple[ShelfLifeStage, StockPressure], tuple[Urgency, MarkdownAction]] = {
    (ShelfLifeStage.FRESH, StockPressure.VERY_HIGH): (Urgency.MEDIUM, MarkdownAction.CONSIDER_DISCOUNT),
    (ShelfLifeStage.FRESH, StockPressure.HIGH): (Urgency.LOW, MarkdownAction.CONSIDER_DISCOUNT),
}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _days_phrase(days: int) -> str:
    return "1 day" if days == 1 else f"{days} days"


def _stage_clause(stage: ShelfLifeStage, days_to_expiry: int) -> str:
    if stage is ShelfLifeStage.EXPIRED:
        if days_to_expiry < 0:
            return f"Expired {_days_phrase(-days_to_expiry)} ago - clearance sale"
        return "Expires today - clearance sale"
    if stage is ShelfLifeStage.CRITICAL:
        return f"Expires in {_days_phrase(days_to_expiry)} - deep discount needed"
    if stage is ShelfLifeStage.URGENT:
        return f"Expires in {_days_phrase(days_to_expiry)} - discount today"
    if stage is ShelfLifeStage.MEDIUM:
        return f"Expires in {_days_phrase(days_to_expiry)} - schedule a discount"
    return "Fresh stock - normal sales expected"


def _pressure_clause(pressure: StockPressure, avg_sales: float, days_to_sell: int) -> str | None:
    if pressure is StockPressure.VERY_HIGH:
        if is_unbounded(days_to_sell):
            return "no recent sales to clear current stock"
        return f"stock needs {_days_phrase(days_to_sell)} to sell at {avg_sales:.1f} units/day"
    if pressure is StockPressure.HIGH:
        return "sales velocity too slow for stock level"
    if pressure is StockPressure.MEDIUM:
        return "stock slightly above expected sales"
    return None


def compose_reason(
    stage: ShelfLifeStage,
    pressure: StockPressure,
    days_to_expiry: int,
    avg_sales: float,
    days_to_sell: int,
) -> str:
    """Join the expiry-driven clause with a pressure clause when pressure is medium or worse."""
    clauses = [_stage_clause(stage, days_to_expiry)]
    pressure_clause = _pressure_clause(pressure, avg_sales, days_to_sell)
    if pressure_clause:
        clauses.append(pressure_clause)
    return "; ".join(clauses)


def stage_discount(
    stage: ShelfLifeStage,
    pressure: StockPressure,
    policy: CategoryPolicy,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> int:
    """
    Discount percentage for a stage/pressure pair under a category policy.

    Expired stock gets the flat clearance markdown (max_discount plus the
    clearance bonus). Earlier stages scale a fraction of max_discount by stock
    pressure and perishability, and never exceed the clearance markdown, so
    the discount cannot drop as expiry approaches.
    """
    ceiling = config.discount_ceiling(policy)
    clearance = clamp(config.clearance_discount(policy), 0, ceiling)
    if stage is ShelfLifeStage.EXPIRED:
        return clearance
    base = policy.max_discount * config.stage_fractions[stage.value]
    scaled = base * config.pressure_multipliers[pressure.value] * policy.perishability_factor
    return clamp(round_half_up(scaled), 0, clearance)


def decide_discount(
    stage: ShelfLifeStage,
    pressure: StockPressure,
    policy: CategoryPolicy,
    analytics: DiscountAnalytics,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> DiscountRecommendation:
    if stage is ShelfLifeStage.FRESH and pressure in (StockPressure.LOW, StockPressure.VERY_LOW):
        return DiscountRecommendation(
            discount=0,
            urgency=Urgency.NONE,
            action=MarkdownAction.NO_ACTION,
            reason=FRESH_LOW_STOCK_REASON,
            analytics=analytics,
        )

    urgency, action = STAGE_TIERS[stage]
    escalation = PRESSURE_ESCALATIONS.get((stage, pressure))
    if escalation is not None:
        escalated_urgency, action = escalation
        urgency = urgency.escalate_to(escalated_urgency)

    days_to_sell = analytics.days_to_sell_stock
    reason = compose_reason(
        stage,
        pressure,
        analytics.days_to_expiry,
        analytics.avg_daily_sales,
        days_to_sell if days_to_sell is not None else UNBOUNDED_DAYS,
    )
    return DiscountRecommendation(
        discount=stage_discount(stage, pressure, policy, config),
        urgency=urgency,
        action=action,
        reason=reason,
        analytics=analytics,
    )


def discount_recommendation(
    product: Product | Mapping[str, Any],
    reference_date: date | datetime | None = None,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> DiscountRecommendation:
    """
    Compute the markdown recommendation for a product on a reference date.

    Unknown categories use the default policy; missing sales history counts
    as no sales; missing consumption days fall back to the category shelf
    life. Invalid records raise pydantic.ValidationError.
    """
    product = as_product(product)
    if product.category not in config.policies:
        logger.debug(f"Category '{product.category}' not configured for {product.id}; using default policy.")
    policy = config.policies.resolve(product.category)

    days_to_expiry = days_until_expiry(product.expiry_date, reference_date)
    avg_sales = average_daily_sales(product.sales_last_7_days)
    days_to_sell = days_to_sell_stock(product.stock, avg_sales)
    stage = shelf_life_stage(product, days_to_expiry, policy)
    pressure = stock_pressure(product.stock, days_to_expiry, avg_sales)

    analytics = DiscountAnalytics(
        shelf_life_stage=stage,
        stock_pressure=pressure,
        days_to_expiry=days_to_expiry,
        category=product.category,
        perishability_factor=policy.perishability_factor,
        avg_daily_sales=avg_sales,
        days_to_sell_stock=None if is_unbounded(days_to_sell) else days_to_sell,
        shelf_life_ratio=shelf_life_ratio(product, days_to_expiry, policy),
    )
    recommendation = decide_discount(stage, pressure, policy, analytics, config)
    logger.debug(
        f"Discount {product.id}: {recommendation.discount}% "
        f"(stage={stage.value}, pressure={pressure.value}, urgency={recommendation.urgency.value})"
    )
    return recommendation
