import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import pricing`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from models.product import Product  # noqa: E402

# A Wednesday in June: dairy/produce/meat are in high season, weekday demand is neutral.
REFERENCE_DATE = date(2025, 6, 25)


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def make_product(reference_date):
    """Factory for products expiring a given number of days after the reference date."""

    def _make(days_to_expiry: int = 5, **overrides) -> Product:
        record = {
            "id": "P1",
            "name": "Test Product",
            "category": "dairy",
            "price": 10.0,
            "stock": 10,
            "sales_last_7_days": [5, 5, 5, 5, 5, 5, 5],
            "typical_consumption_days": 10,
            "expiry_date": reference_date + timedelta(days=days_to_expiry),
        }
        record.update(overrides)
        return Product(**record)

    return _make


@pytest.fixture
def catalog(make_product):
    """Five products across two categories with known urgency tiers."""
    return [
        make_product(9, id="fresh-a", category="produce", stock=2, sales_last_7_days=[1] * 7),
        make_product(2, id="slow-small", typical_consumption_days=None, stock=20, sales_last_7_days=[0] * 7),
        make_product(1, id="critical", typical_consumption_days=7, stock=10, sales_last_7_days=[10] * 7),
        make_product(2, id="slow-big", typical_consumption_days=None, stock=50, sales_last_7_days=[0] * 7),
        make_product(9, id="fresh-b", category="produce", stock=2, sales_last_7_days=[1] * 7),
    ]
