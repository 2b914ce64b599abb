import pytest

from models.inventory import InventoryPosition, InventoryStatus


@pytest.mark.parametrize(
    "stock, rate, expected",
    [
        (0, 10, InventoryStatus.CRITICAL),
        (5, 10, InventoryStatus.CRITICAL),
        (20, 10, InventoryStatus.LOW),
        (50, 10, InventoryStatus.ADEQUATE),
        (161, 10, InventoryStatus.EXCESS),
        (10, 0, InventoryStatus.EXCESS),
    ],
)
def test_inventory_position_status(stock, rate, expected):
    position = InventoryPosition(product_id="P1", current_stock=stock, daily_sales_rate=rate, target_days=8)
    assert position.get_status() == expected


def test_days_of_supply():
    assert InventoryPosition("P1", 30, 10, 8).days_of_supply() == 3
    assert InventoryPosition("P1", 30, 0, 8).days_of_supply() is None
