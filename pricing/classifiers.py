"""
Shelf-life and stock-pressure classification.

Both classifiers are evaluated most-urgent band first, so a value sitting on
a band boundary takes the more urgent label.
"""

from config.config import CategoryPolicy
from models.enums import ShelfLifeStage, StockPressure
from models.product import Product
from pricing.temporal import days_to_sell_stock, is_unbounded

MEDIUM_STAGE_RATIO = 0.7

# (lower bound exclusive, label), checked in order
PRESSURE_BANDS: tuple[tuple[float, StockPressure], ...] = (
    (2.0, StockPressure.VERY_HIGH),
    (1.5, StockPressure.HIGH),
    (1.0, StockPressure.MEDIUM),
    (0.5, StockPressure.LOW),
)


def shelf_life_ratio(product: Product, days_to_expiry: int, policy: CategoryPolicy) -> float | None:
    """Fraction of the expected shelf life still remaining, None once expired."""
    if days_to_expiry <= 0:
        return None
    shelf_life = product.typical_consumption_days or policy.max_shelf_life
    return days_to_expiry / shelf_life


def shelf_life_stage(product: Product, days_to_expiry: int, policy: CategoryPolicy) -> ShelfLifeStage:
    ratio = shelf_life_ratio(product, days_to_expiry, policy)
    if ratio is None:
        return ShelfLifeStage.EXPIRED
    if ratio <= policy.critical_threshold:
        return ShelfLifeStage.CRITICAL
    if ratio <= policy.urgent_threshold:
        return ShelfLifeStage.URGENT
    if ratio <= MEDIUM_STAGE_RATIO:
        return ShelfLifeStage.MEDIUM
    return ShelfLifeStage.FRESH


def stock_pressure(stock: int, days_to_expiry: int, avg_daily_sales: float) -> StockPressure:
    """Classify how far the time needed to sell the stock overshoots the time left."""
    days_to_sell = days_to_sell_stock(stock, avg_daily_sales)
    if is_unbounded(days_to_sell):
        return StockPressure.VERY_HIGH
    ratio = days_to_sell / max(days_to_expiry, 1)
    for bound, pressure in PRESSURE_BANDS:
        if ratio > bound:
            return pressure
    return StockPressure.VERY_LOW
