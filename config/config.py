"""
Configuration classes for the perishable markdown engine.
Defines category policies, seasonal demand tables and engine tunables in a
type-safe, extensible way.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from utils.env import env_flag, env_int

DEFAULT_CATEGORY = "default"


@dataclass(frozen=True)
class CategoryPolicy:
    """
    Markdown policy for one product category.

    Thresholds are fractions of shelf life remaining (0-1); max_discount is a
    percentage cap; perishability_factor amplifies markdowns for fast-decaying
    goods and is never below 1.
    """

    max_shelf_life: int
    urgent_threshold: float
    critical_threshold: float
    max_discount: int
    perishability_factor: float = 1.0

    def __post_init__(self):
        if self.max_shelf_life <= 0:
            raise ValueError("max_shelf_life must be positive")
        if not 0 <= self.critical_threshold <= self.urgent_threshold <= 1:
            raise ValueError("thresholds must satisfy 0 <= critical <= urgent <= 1")
        if self.max_discount < 0:
            raise ValueError("max_discount must be non-negative")
        if self.perishability_factor < 1:
            raise ValueError("perishability_factor must be >= 1")


DEFAULT_CATEGORY_POLICIES: Mapping[str, CategoryPolicy] = MappingProxyType(
    {
        "dairy": CategoryPolicy(7, 0.30, 0.15, 50, 1.3),
        "produce": CategoryPolicy(10, 0.30, 0.15, 60, 1.4),
        "bakery": CategoryPolicy(3, 0.40, 0.20, 60, 1.5),
        "meat": CategoryPolicy(5, 0.40, 0.20, 55, 1.4),
        "prepared": CategoryPolicy(2, 0.50, 0.25, 70, 1.6),
        DEFAULT_CATEGORY: CategoryPolicy(30, 0.20, 0.10, 40, 1.0),
    }
)


class PolicyTable:
    """Immutable lookup of category policies with a required default entry."""

    def __init__(self, policies: Mapping[str, CategoryPolicy] = DEFAULT_CATEGORY_POLICIES):
        if DEFAULT_CATEGORY not in policies:
            raise ValueError(f"Policy table requires a '{DEFAULT_CATEGORY}' entry")
        self._policies = MappingProxyType({k.lower(): v for k, v in policies.items()})

    def resolve(self, category: str | None) -> CategoryPolicy:
        """Return the policy for category, falling back to the default policy."""
        if category:
            policy = self._policies.get(category.lower())
            if policy is not None:
                return policy
        return self._policies[DEFAULT_CATEGORY]

    def __contains__(self, category: str) -> bool:
        return category.lower() in self._policies

    def categories(self) -> list[str]:
        return [name for name in self._policies if name != DEFAULT_CATEGORY]


# Monthly demand index per category, January first.
DEFAULT_MONTH_FACTORS: Mapping[str, tuple[float, ...]] = MappingProxyType(
    {
        "dairy": (0.95, 0.95, 1.0, 1.05, 1.15, 1.2, 1.15, 1.05, 1.0, 1.0, 0.95, 1.0),
        "produce": (0.85, 0.85, 0.95, 1.05, 1.15, 1.2, 1.2, 1.15, 1.05, 0.95, 0.9, 0.85),
        "bakery": (0.85, 0.9, 0.95, 1.0, 1.0, 0.95, 0.95, 1.0, 1.0, 1.05, 1.15, 1.25),
        "meat": (0.85, 0.85, 0.95, 1.0, 1.15, 1.2, 1.25, 1.15, 1.0, 0.95, 1.05, 1.2),
        "prepared": (1.0, 1.0, 1.0, 1.0, 1.05, 1.1, 1.1, 1.05, 1.0, 1.0, 1.0, 1.15),
    }
)

# Day-of-week demand index, 0 = Sunday .. 6 = Saturday.
DEFAULT_DAY_FACTORS: tuple[float, ...] = (1.25, 0.85, 0.85, 0.9, 1.0, 1.15, 1.3)


@dataclass(frozen=True)
class SeasonalConfig:
    month_factors: Mapping[str, tuple[float, ...]] = field(
        default_factory=lambda: DEFAULT_MONTH_FACTORS
    )
    day_factors: tuple[float, ...] = DEFAULT_DAY_FACTORS
    high_month_demand: float = 1.1
    low_month_demand: float = 0.9
    high_day_demand: float = 1.2
    low_day_demand: float = 0.9

    def __post_init__(self):
        for category, factors in self.month_factors.items():
            if len(factors) != 12:
                raise ValueError(f"Month factors for '{category}' need 12 values")
        if len(self.day_factors) != 7:
            raise ValueError("Day factors need 7 values (Sunday first)")

    def month_factor(self, category: str | None, month: int) -> float:
        factors = self.month_factors.get((category or "").lower())
        if factors is None:
            return 1.0
        return factors[month - 1]

    def day_factor(self, day_of_week: int) -> float:
        return self.day_factors[day_of_week]


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


@dataclass(frozen=True)
class MarkdownEngineConfig:
    """Tunables for the discount calculator, restock planner and scoring."""

    policies: PolicyTable = field(default_factory=PolicyTable)
    seasonal: SeasonalConfig = field(default_factory=SeasonalConfig)
    apply_seasonality: bool = True
    clearance_bonus: int = 10  # expired tier: max_discount + bonus
    ceiling_bonus: int = 15  # hard ceiling: max_discount + bonus
    stage_fractions: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {"critical": 0.8, "urgent": 0.5, "medium": 0.25, "fresh": 0.0}
        )
    )
    pressure_multipliers: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {"very_high": 1.8, "high": 1.4, "medium": 1.1, "low": 0.8, "very_low": 0.5}
        )
    )
    restock_target_days: int = 8
    min_order_quantity: int = 5
    trend_multipliers: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {
                "increasing": 1.3,
                "slightly_increasing": 1.15,
                "stable": 1.0,
                "slightly_decreasing": 0.85,
                "decreasing": 0.7,
            }
        )
    )
    volatility_multipliers: Mapping[str, float] = field(
        default_factory=lambda: _frozen({"high": 1.2, "medium": 1.1, "low": 1.0})
    )
    urgency_deductions: Mapping[str, int] = field(
        default_factory=lambda: _frozen(
            {"critical": 40, "high": 25, "medium": 15, "low": 5, "none": 0}
        )
    )
    trend_deductions: Mapping[str, int] = field(
        default_factory=lambda: _frozen({"decreasing": 20, "slightly_decreasing": 10})
    )
    volatility_deductions: Mapping[str, int] = field(
        default_factory=lambda: _frozen({"high": 15, "medium": 5})
    )
    stock_status_deductions: Mapping[str, int] = field(
        default_factory=lambda: _frozen({"EXCESS": 20, "CRITICAL": 30})
    )

    def discount_ceiling(self, policy: CategoryPolicy) -> int:
        return policy.max_discount + self.ceiling_bonus

    def clearance_discount(self, policy: CategoryPolicy) -> int:
        return policy.max_discount + self.clearance_bonus

    @classmethod
    def from_env(cls, **overrides) -> "MarkdownEngineConfig":
        """Build a config, reading restock and seasonality settings from the environment."""
        values: dict = {
            "restock_target_days": env_int("MARKDOWN_RESTOCK_TARGET_DAYS", cls.restock_target_days),
            "min_order_quantity": env_int("MARKDOWN_MIN_ORDER_QUANTITY", cls.min_order_quantity),
            "apply_seasonality": env_flag("MARKDOWN_APPLY_SEASONALITY", default=cls.apply_seasonality),
        }
        values.update(overrides)
        return cls(**values)


DEFAULT_CONFIG = MarkdownEngineConfig()


# Example usage:
# config = MarkdownEngineConfig.from_env(apply_seasonality=False)
# policy = config.policies.resolve("dairy")
