"""
Pricing-related result models for the markdown engine.
Includes the discount recommendation, its seasonal variant, the financial
projection and the restock recommendation.
"""

from dataclasses import asdict, dataclass

from models.enums import (
    DemandVolatility,
    MarkdownAction,
    SalesTrend,
    ShelfLifeStage,
    StockPressure,
    Urgency,
)
from models.inventory import InventoryStatus


@dataclass
class DiscountAnalytics:
    """Intermediate signals behind a discount decision."""

    shelf_life_stage: ShelfLifeStage
    stock_pressure: StockPressure
    days_to_expiry: int
    category: str
    perishability_factor: float
    avg_daily_sales: float
    days_to_sell_stock: int | None  # None when stock cannot sell at current velocity
    shelf_life_ratio: float | None  # None once expired


@dataclass
class DiscountRecommendation:
    """
    Markdown decision for a single product on a reference date.
    """

    discount: int
    urgency: Urgency
    action: MarkdownAction
    reason: str
    analytics: DiscountAnalytics

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SeasonalRecommendation(DiscountRecommendation):
    """A discount recommendation after month and day-of-week demand adjustment."""

    base_discount: int = 0
    adjustment_factor: float = 1.0
    month_factor: float = 1.0
    day_factor: float = 1.0

    @property
    def seasonally_adjusted(self) -> bool:
        return self.discount != self.base_discount


@dataclass
class FinancialProjection:
    discounted_price: float
    potential_unsold_units: float
    potential_loss: float
    savings: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RestockRecommendation:
    """Next batch quantity suggestion for a product."""

    product_id: int | str
    recommended_quantity: int
    reasoning: str
    current_stock: int
    stock_status: InventoryStatus
    avg_daily_sales: float
    days_of_supply: float | None
    sales_trend: SalesTrend
    demand_volatility: DemandVolatility
    target_days: int

    def to_dict(self) -> dict:
        return asdict(self)
