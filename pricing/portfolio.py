"""
Portfolio aggregation: per-product performance metrics, prioritized action
lists, category rollups and executive summary with actionable insights.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from config.config import DEFAULT_CONFIG, MarkdownEngineConfig
from models.enums import (
    DemandVolatility,
    MarkdownAction,
    RiskStatus,
    SalesTrend,
    ShelfLifeStage,
    Urgency,
)
from models.inventory import InventoryStatus
from models.portfolio import (
    ActionPlan,
    CategoryStats,
    PerformanceMetrics,
    PortfolioAnalysis,
    PortfolioSummary,
)
from models.pricing import DiscountRecommendation, RestockRecommendation
from models.product import Product, as_product
from pricing.discount import discount_recommendation
from pricing.financial import financial_summary
from pricing.seasonal import seasonal_recommendation
from pricing.temporal import resolve_reference_date
from pricing.trends import restock_recommendation

logger = logging.getLogger(__name__)

ProductLike = Product | Mapping[str, Any]

URGENCY_ORDER = (Urgency.CRITICAL, Urgency.HIGH, Urgency.MEDIUM, Urgency.LOW, Urgency.NONE)
IMMEDIATE_URGENCIES = (Urgency.CRITICAL, Urgency.HIGH)
MONITOR_URGENCIES = (Urgency.MEDIUM,)

HIGH_RISK_LEVEL = 0.4
MEDIUM_RISK_LEVEL = 0.2

ACTION_STEPS = {
    MarkdownAction.IMMEDIATE_CLEARANCE: "Move stock to the clearance display at {discount}% off",
    MarkdownAction.APPLY_IMMEDIATELY: "Apply {discount}% markdown immediately",
    MarkdownAction.APPLY_TODAY: "Apply {discount}% markdown today",
    MarkdownAction.SCHEDULE_DISCOUNT: "Schedule a {discount}% markdown within 2 days",
    MarkdownAction.CONSIDER_DISCOUNT: "Consider a promotion to lift sell-through",
    MarkdownAction.MONITOR: "Monitor sell-through daily",
    MarkdownAction.NO_ACTION: "No markdown needed",
}


def performance_score(
    urgency: Urgency,
    trend: SalesTrend,
    volatility: DemandVolatility,
    status: InventoryStatus,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> int:
    """Composite 0-100 health score: start at 100 and deduct for each risk signal."""
    score = 100
    score -= config.urgency_deductions.get(urgency.value, 0)
    score -= config.trend_deductions.get(trend.value, 0)
    score -= config.volatility_deductions.get(volatility.value, 0)
    score -= config.stock_status_deductions.get(status.value, 0)
    return max(0, min(100, score))


def build_action_plan(recommendation: DiscountRecommendation, restock: RestockRecommendation) -> ActionPlan:
    steps = [ACTION_STEPS[recommendation.action].format(discount=recommendation.discount)]
    expired = recommendation.analytics.shelf_life_stage is ShelfLifeStage.EXPIRED
    if recommendation.urgency in IMMEDIATE_URGENCIES and not expired:
        steps.append("Move to the front of the display")
    if restock.stock_status in (InventoryStatus.CRITICAL, InventoryStatus.LOW) and not expired:
        steps.append(f"Reorder {restock.recommended_quantity} units")
    elif restock.stock_status is InventoryStatus.EXCESS:
        steps.append("Pause reorders until current stock clears")
    if restock.sales_trend in (SalesTrend.DECREASING, SalesTrend.SLIGHTLY_DECREASING):
        steps.append("Review demand: sales are declining")
    if restock.demand_volatility is DemandVolatility.HIGH:
        steps.append("Demand is volatile; check stock levels daily")
    return ActionPlan(
        primary_action=recommendation.action,
        priority=len(URGENCY_ORDER) - recommendation.urgency.rank,
        steps=steps,
    )


def performance_metrics(
    product: ProductLike,
    reference_date: date | datetime | None = None,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> PerformanceMetrics:
    """Markdown, financial, trend and restock view of a single product."""
    product = as_product(product)
    reference = resolve_reference_date(reference_date)
    if config.apply_seasonality:
        recommendation = seasonal_recommendation(product, reference, config)
    else:
        recommendation = discount_recommendation(product, reference, config)
    financials = financial_summary(product, recommendation, reference)
    restock = restock_recommendation(product, config)
    score = performance_score(
        recommendation.urgency,
        restock.sales_trend,
        restock.demand_volatility,
        restock.stock_status,
        config,
    )
    return PerformanceMetrics(
        product_id=product.id,
        name=product.name,
        category=product.category,
        price=product.price,
        stock=product.stock,
        days_to_expiry=recommendation.analytics.days_to_expiry,
        recommendation=recommendation,
        financials=financials,
        avg_daily_sales=restock.avg_daily_sales,
        sales_trend=restock.sales_trend,
        demand_volatility=restock.demand_volatility,
        stock_status=restock.stock_status,
        restock=restock,
        performance_score=score,
        action_plan=build_action_plan(recommendation, restock),
    )


def prioritize(metrics: Iterable[PerformanceMetrics]) -> list[PerformanceMetrics]:
    """Most urgent first, then largest potential loss; ties keep input order."""
    return sorted(metrics, key=lambda m: (-m.urgency.rank, -m.financials.potential_loss))


def urgency_distribution(metrics: Iterable[PerformanceMetrics]) -> dict[str, int]:
    counts = Counter(m.urgency for m in metrics)
    return {urgency.value: counts.get(urgency, 0) for urgency in URGENCY_ORDER}


def risk_status(risk_level: float) -> RiskStatus:
    if risk_level > HIGH_RISK_LEVEL:
        return RiskStatus.HIGH
    elif risk_level > MEDIUM_RISK_LEVEL:
        return RiskStatus.MEDIUM
    return RiskStatus.LOW


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _category_stats(category: str, metrics: list[PerformanceMetrics]) -> CategoryStats:
    ordered = prioritize(metrics)
    critical_or_high = [m for m in ordered if m.urgency in IMMEDIATE_URGENCIES]
    discounted = [m.discount for m in metrics if m.discount > 0]
    risk_level = len(critical_or_high) / len(metrics) if metrics else 0.0
    return CategoryStats(
        category=category,
        product_count=len(metrics),
        total_value=sum(m.financials.current_value for m in metrics),
        potential_loss=sum(m.financials.potential_loss for m in metrics),
        potential_savings=sum(m.financials.potential_savings for m in metrics),
        discount_savings=sum(m.financials.discount_savings for m in metrics),
        urgency_distribution=urgency_distribution(metrics),
        critical_or_high_count=len(critical_or_high),
        risk_level=risk_level,
        status=risk_status(risk_level),
        discounted_count=len(discounted),
        average_discount=_mean(discounted),
        average_performance_score=_mean([m.performance_score for m in metrics]),
        immediate_action=[m.product_id for m in critical_or_high],
        monitor=[m.product_id for m in ordered if m.urgency in MONITOR_URGENCIES],
        stable=[m.product_id for m in ordered if m.urgency in (Urgency.LOW, Urgency.NONE)],
    )


def rollup_categories(metrics: Iterable[PerformanceMetrics]) -> dict[str, CategoryStats]:
    """Group metrics by category (first-seen order) and summarise each group."""
    groups: dict[str, list[PerformanceMetrics]] = {}
    for m in metrics:
        groups.setdefault(m.category, []).append(m)
    return {category: _category_stats(category, group) for category, group in groups.items()}


def summarize(metrics: list[PerformanceMetrics]) -> PortfolioSummary:
    total_loss = sum(m.financials.potential_loss for m in metrics)
    total_discount_savings = sum(m.financials.discount_savings for m in metrics)
    at_stake = total_discount_savings + total_loss
    return PortfolioSummary(
        total_products=len(metrics),
        total_inventory_value=sum(m.financials.current_value for m in metrics),
        total_potential_loss=total_loss,
        total_potential_savings=sum(m.financials.potential_savings for m in metrics),
        total_discount_savings=total_discount_savings,
        urgency_distribution=urgency_distribution(metrics),
        average_performance_score=_mean([m.performance_score for m in metrics]),
        discounted_product_count=sum(1 for m in metrics if m.discount > 0),
        waste_reduction_percent=(total_discount_savings / at_stake * 100) if at_stake > 0 else 0.0,
    )


def actionable_insights(
    summary: PortfolioSummary,
    prioritized: list[PerformanceMetrics],
    categories: Mapping[str, CategoryStats],
) -> list[str]:
    """Short, human-readable findings for the store team, most pressing first."""
    if not prioritized:
        return ["No products to analyze."]

    insights = []
    immediate = [m for m in prioritized if m.urgency in IMMEDIATE_URGENCIES]
    if immediate:
        at_risk = sum(m.financials.potential_loss for m in immediate)
        insights.append(
            f"{len(immediate)} product(s) need immediate markdown action, "
            f"with {at_risk:.2f} of potential loss at stake."
        )
    expired = [m for m in prioritized if m.days_to_expiry <= 0]
    if expired:
        insights.append(f"{len(expired)} product(s) are past expiry and should be cleared today.")

    risky = [c for c in categories.values() if c.status is not RiskStatus.LOW]
    if risky:
        worst = max(risky, key=lambda c: c.risk_level)
        insights.append(
            f"'{worst.category}' is the highest-risk category "
            f"({worst.risk_level:.0%} of products critical or high urgency)."
        )

    declining = sum(1 for m in prioritized if m.sales_trend is SalesTrend.DECREASING)
    if declining:
        insights.append(f"{declining} product(s) show decreasing sales; review reorder quantities.")
    volatile = sum(1 for m in prioritized if m.demand_volatility is DemandVolatility.HIGH)
    if volatile:
        insights.append(f"{volatile} product(s) have highly volatile demand; monitor them daily.")
    running_low = sum(
        1
        for m in prioritized
        if m.stock_status in (InventoryStatus.CRITICAL, InventoryStatus.LOW) and m.days_to_expiry > 0
    )
    if running_low:
        insights.append(f"{running_low} product(s) are running low and need restocking.")

    if summary.total_discount_savings > 0:
        insights.append(
            f"Recommended markdowns cover {summary.waste_reduction_percent:.1f}% of the value at risk "
            f"({summary.total_potential_loss:.2f} potential loss)."
        )
    if not immediate:
        insights.append("Inventory is healthy; no immediate markdowns required.")
    return insights


def _validated(products: Iterable[ProductLike]) -> list[Product]:
    # Validate the whole batch first so a bad record fails before any work is done.
    return [as_product(p) for p in products]


def analyze_portfolio(
    products: Iterable[ProductLike],
    reference_date: date | datetime | None = None,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> PortfolioAnalysis:
    """
    Run the per-product analysis over a catalog and roll it up.

    Products are ordered by urgency (most urgent first) then potential loss
    (largest first); equal keys keep their input order.
    """
    reference = resolve_reference_date(reference_date)
    catalog = _validated(products)
    metrics = [performance_metrics(p, reference, config) for p in catalog]
    ordered = prioritize(metrics)
    summary = summarize(metrics)
    categories = rollup_categories(metrics)

    analysis = PortfolioAnalysis(
        reference_date=reference.date(),
        products=ordered,
        summary=summary,
        immediate_action=[m for m in ordered if m.urgency in IMMEDIATE_URGENCIES],
        monitor=[m for m in ordered if m.urgency in MONITOR_URGENCIES],
        stable=[m for m in ordered if m.urgency in (Urgency.LOW, Urgency.NONE)],
        categories=categories,
        insights=actionable_insights(summary, ordered, categories),
    )
    logger.info(
        f"Analyzed {summary.total_products} products for {reference.date()}: "
        f"{len(analysis.immediate_action)} immediate, {len(analysis.monitor)} monitor, "
        f"{len(analysis.stable)} stable; potential loss {summary.total_potential_loss:.2f}"
    )
    return analysis


def category_insights(
    products: Iterable[ProductLike],
    reference_date: date | datetime | None = None,
    config: MarkdownEngineConfig = DEFAULT_CONFIG,
) -> dict[str, CategoryStats]:
    reference = resolve_reference_date(reference_date)
    catalog = _validated(products)
    return rollup_categories(performance_metrics(p, reference, config) for p in catalog)
