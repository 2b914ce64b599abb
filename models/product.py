"""
Product data model for the markdown engine.

Catalog records are validated into an immutable ``Product``. Legitimate
business states (past expiry, empty sales history, unknown category) are
accepted; broken upstream data (negative stock, non-positive price, negative
or non-finite numbers, malformed dates) raises ``pydantic.ValidationError``.
"""

from datetime import date
from typing import Annotated, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Units sold in one day: finite and non-negative.
DailySales = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class Product(BaseModel):
    """A perishable product snapshot as supplied by the catalog."""

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    id: int | str
    name: str
    category: str
    price: float = Field(gt=0, allow_inf_nan=False)
    expiry_date: date
    stock: int = Field(ge=0)
    sales_last_7_days: list[DailySales] = Field(default_factory=list)
    typical_consumption_days: int | None = Field(default=None, gt=0)
    section: str | None = None
    brand: str | None = None
    unit: str | None = None
    description: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _normalise_category(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("sales_last_7_days", mode="before")
    @classmethod
    def _default_history(cls, value: Any) -> Any:
        # Absent history is a valid state: no sales recorded.
        return [] if value is None else value

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Product":
        """Validate a raw catalog record (e.g. parsed JSON) into a Product."""
        return cls.model_validate(dict(record))

    @property
    def inventory_value(self) -> float:
        return self.price * self.stock


def as_product(product: "Product | Mapping[str, Any]") -> Product:
    """Accept either a Product or a raw record."""
    if isinstance(product, Product):
        return product
    return Product.from_record(product)
