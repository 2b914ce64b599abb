"""
MarkdownEngine: the markdown engine's public contract bound to one
configuration.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from config.config import DEFAULT_CONFIG, MarkdownEngineConfig
from models.portfolio import CategoryStats, PerformanceMetrics, PortfolioAnalysis
from models.pricing import DiscountRecommendation, RestockRecommendation, SeasonalRecommendation
from models.product import Product
from pricing import discount, portfolio, seasonal, trends

logger = logging.getLogger(__name__)

ProductLike = Product | Mapping[str, Any]
ReferenceDate = date | datetime | None


class MarkdownEngine:
    """
    Computes markdown recommendations and portfolio analytics for perishable
    inventory. Stateless apart from its configuration, so one instance can be
    shared freely.
    """

    def __init__(self, config: MarkdownEngineConfig | None = None):
        self.config = config or DEFAULT_CONFIG
        logger.info(
            f"Markdown engine init (categories={self.config.policies.categories()}, "
            f"seasonality={self.config.apply_seasonality}, "
            f"restock_target_days={self.config.restock_target_days})"
        )

    @classmethod
    def from_env(cls) -> "MarkdownEngine":
        return cls(MarkdownEngineConfig.from_env())

    def discount_recommendation(self, product: ProductLike, reference_date: ReferenceDate = None) -> DiscountRecommendation:
        return discount.discount_recommendation(product, reference_date, self.config)

    def seasonal_recommendation(self, product: ProductLike, reference_date: ReferenceDate = None) -> SeasonalRecommendation:
        return seasonal.seasonal_recommendation(product, reference_date, self.config)

    def performance_metrics(self, product: ProductLike, reference_date: ReferenceDate = None) -> PerformanceMetrics:
        return portfolio.performance_metrics(product, reference_date, self.config)

    def analyze_portfolio(self, products: Iterable[ProductLike], reference_date: ReferenceDate = None) -> PortfolioAnalysis:
        return portfolio.analyze_portfolio(products, reference_date, self.config)

    def category_insights(
        self, products: Iterable[ProductLike], reference_date: ReferenceDate = None
    ) -> dict[str, CategoryStats]:
        return portfolio.category_insights(products, reference_date, self.config)

    def restock_recommendation(self, product: ProductLike) -> RestockRecommendation:
        return trends.restock_recommendation(product, self.config)
