"""
Centralized Enum definitions for the markdown engine.
"""

from enum import Enum


class Urgency(str, Enum):
    """Priority tier for acting on a markdown recommendation"""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _URGENCY_RANK[self]

    def escalate_to(self, other: "Urgency") -> "Urgency":
        """Return the more urgent of self and other."""
        return other if other.rank > self.rank else self


_URGENCY_RANK = {
    Urgency.NONE: 0,
    Urgency.LOW: 1,
    Urgency.MEDIUM: 2,
    Urgency.HIGH: 3,
    Urgency.CRITICAL: 4,
}


class MarkdownAction(str, Enum):
    """Recommended store action for a product"""

    NO_ACTION = "no_action"
    MONITOR = "monitor"
    CONSIDER_DISCOUNT = "consider_discount"
    SCHEDULE_DISCOUNT = "schedule_discount"
    APPLY_TODAY = "apply_today"
    APPLY_IMMEDIATELY = "apply_immediately"
    IMMEDIATE_CLEARANCE = "immediate_clearance"


class ShelfLifeStage(str, Enum):
    """How much of a product's useful life remains"""

    FRESH = "fresh"
    MEDIUM = "medium"
    URGENT = "urgent"
    CRITICAL = "critical"
    EXPIRED = "expired"


class StockPressure(str, Enum):
    """Inventory risk relative to the time left to sell it"""

    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class SalesTrend(str, Enum):
    INCREASING = "increasing"
    SLIGHTLY_INCREASING = "slightly_increasing"
    STABLE = "stable"
    SLIGHTLY_DECREASING = "slightly_decreasing"
    DECREASING = "decreasing"


class DemandVolatility(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskStatus(str, Enum):
    """Category-level risk label"""

    HIGH = "High Risk"
    MEDIUM = "Medium Risk"
    LOW = "Low Risk"
