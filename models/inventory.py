"""
Inventory-related data models for the markdown engine.
Includes the InventoryStatus enum and the InventoryPosition snapshot used for
restock planning.
"""

from dataclasses import dataclass
from enum import Enum


class InventoryStatus(str, Enum):
    """Enumeration of stock status levels for a product."""

    CRITICAL = "CRITICAL"
    LOW = "LOW"
    ADEQUATE = "ADEQUATE"
    EXCESS = "EXCESS"


@dataclass
class InventoryPosition:
    """Stock on hand measured against sales velocity and a target cover."""

    product_id: int | str
    current_stock: int
    daily_sales_rate: float
    target_days: int

    def days_of_supply(self) -> float | None:
        """Return the days of supply, or None when nothing is selling."""
        if self.daily_sales_rate <= 0:
            return None
        return self.current_stock / self.daily_sales_rate

    def get_status(self) -> InventoryStatus:
        """Return the stock status based on days of supply versus the target cover."""
        if self.current_stock <= 0:
            return InventoryStatus.CRITICAL
        supply = self.days_of_supply()
        if supply is None:
            return InventoryStatus.EXCESS
        if supply < 1:
            return InventoryStatus.CRITICAL
        elif supply < 3:
            return InventoryStatus.LOW
        elif supply > self.target_days * 2:
            return InventoryStatus.EXCESS
        else:
            return InventoryStatus.ADEQUATE
