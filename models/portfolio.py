"""
Portfolio-level result models: per-product performance metrics, category
rollups and the executive summary.
"""

from dataclasses import asdict, dataclass, field
from datetime import date

from models.enums import (
    DemandVolatility,
    MarkdownAction,
    RiskStatus,
    SalesTrend,
    Urgency,
)
from models.inventory import InventoryStatus
from models.pricing import DiscountRecommendation, RestockRecommendation


@dataclass
class FinancialSummary:
    current_value: float
    discounted_price: float
    discounted_value: float
    potential_loss: float
    potential_savings: float  # current_value - potential_loss
    discount_savings: float  # markdown given away across full stock
    potential_unsold_units: float


@dataclass
class ActionPlan:
    primary_action: MarkdownAction
    priority: int  # 1 = act first
    steps: list[str] = field(default_factory=list)


@dataclass
class PerformanceMetrics:
    """
    Health and financial snapshot of one product, combining the markdown
    recommendation with trend, volatility and restock signals.
    """

    product_id: int | str
    name: str
    category: str
    price: float
    stock: int
    days_to_expiry: int
    recommendation: DiscountRecommendation
    financials: FinancialSummary
    avg_daily_sales: float
    sales_trend: SalesTrend
    demand_volatility: DemandVolatility
    stock_status: InventoryStatus
    restock: RestockRecommendation
    performance_score: int
    action_plan: ActionPlan

    @property
    def urgency(self) -> Urgency:
        return self.recommendation.urgency

    @property
    def discount(self) -> int:
        return self.recommendation.discount

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CategoryStats:
    category: str
    product_count: int
    total_value: float
    potential_loss: float
    potential_savings: float
    discount_savings: float
    urgency_distribution: dict[str, int]
    critical_or_high_count: int
    risk_level: float
    status: RiskStatus
    discounted_count: int
    average_discount: float
    average_performance_score: float
    immediate_action: list[int | str] = field(default_factory=list)
    monitor: list[int | str] = field(default_factory=list)
    stable: list[int | str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PortfolioSummary:
    total_products: int
    total_inventory_value: float
    total_potential_loss: float
    total_potential_savings: float
    total_discount_savings: float
    urgency_distribution: dict[str, int]
    average_performance_score: float
    discounted_product_count: int
    waste_reduction_percent: float


@dataclass
class PortfolioAnalysis:
    """Prioritized per-product results plus portfolio and category rollups."""

    reference_date: date
    products: list[PerformanceMetrics]
    summary: PortfolioSummary
    immediate_action: list[PerformanceMetrics]
    monitor: list[PerformanceMetrics]
    stable: list[PerformanceMetrics]
    categories: dict[str, CategoryStats]
    insights: list[str]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["reference_date"] = self.reference_date.isoformat()
        return data
