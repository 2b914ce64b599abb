from datetime import date

import pytest

from config.config import SeasonalConfig
from models.enums import Urgency
from models.product import Product
from pricing.seasonal import (
    adjustment_factor,
    day_of_week_index,
    seasonal_adjustment,
    seasonal_factors,
    seasonal_recommendation,
)

WEDNESDAY = date(2025, 6, 25)
SUNDAY = date(2025, 6, 22)
MONDAY = date(2025, 6, 23)


def test_day_of_week_index_is_sunday_first():
    assert day_of_week_index(SUNDAY) == 0
    assert day_of_week_index(MONDAY) == 1
    assert day_of_week_index(WEDNESDAY) == 3
    assert day_of_week_index(date(2025, 6, 28)) == 6


def test_seasonal_factors_for_known_category():
    assert seasonal_factors("dairy", WEDNESDAY) == (1.2, 0.9)
    assert seasonal_factors("Produce", date(2025, 1, 6)) == (0.85, 0.85)


def test_unknown_category_has_neutral_month_factor():
    month_factor, _ = seasonal_factors("grains", WEDNESDAY)
    assert month_factor == 1.0


@pytest.mark.parametrize(
    "month_factor, day_factor, expected",
    [
        (1.0, 1.0, 1.0),
        (1.2, 1.0, 0.8),
        (0.85, 1.0, 1.2),
        (1.0, 1.25, 0.9),
        (1.0, 0.85, 1.1),
        (0.85, 0.85, 1.32),
        (1.1, 0.9, 1.0),  # boundaries are neutral
    ],
)
def test_adjustment_factor(month_factor, day_factor, expected):
    assert adjustment_factor(month_factor, day_factor) == pytest.approx(expected)


def test_seasonal_adjustment_high_season():
    assert seasonal_adjustment(50, "dairy", WEDNESDAY) == 40


def test_seasonal_adjustment_slow_season_and_weekday():
    assert seasonal_adjustment(50, "produce", date(2025, 1, 6)) == 66


def test_seasonal_adjustment_weekend_peak():
    # Sunday 1.25 > 1.2; June grains has no month table
    assert seasonal_adjustment(40, "grains", SUNDAY) == 36


def test_custom_seasonal_config():
    flat = SeasonalConfig(month_factors={}, day_factors=(1.0,) * 7)
    assert seasonal_adjustment(50, "dairy", WEDNESDAY, flat) == 50


def test_seasonal_config_rejects_bad_tables():
    with pytest.raises(ValueError):
        SeasonalConfig(day_factors=(1.0,) * 6)
    with pytest.raises(ValueError):
        SeasonalConfig(month_factors={"dairy": (1.0,) * 11})


def test_seasonal_recommendation_exposes_both_discounts(make_product):
    product = make_product(1, typical_consumption_days=7, stock=10, sales_last_7_days=[10] * 7)
    rec = seasonal_recommendation(product, WEDNESDAY)
    assert rec.base_discount == 42
    assert rec.discount == 34
    assert rec.seasonally_adjusted
    assert rec.month_factor == 1.2
    assert rec.adjustment_factor == pytest.approx(0.8)
    assert rec.urgency == Urgency.CRITICAL
    assert rec.reason.endswith("; seasonal adjustment 42% -> 34%")


def test_seasonal_recommendation_unchanged_keeps_reason(make_product):
    product = make_product(3, category="grains", typical_consumption_days=None, stock=10, sales_last_7_days=[10] * 7)
    rec = seasonal_recommendation(product, WEDNESDAY)
    assert rec.discount == rec.base_discount == 16
    assert not rec.seasonally_adjusted
    assert "seasonal adjustment" not in rec.reason


def test_seasonal_recommendation_respects_ceiling():
    product = Product(
        id="B1",
        name="Spinach",
        category="produce",
        price=30,
        expiry_date=date(2025, 1, 5),
        stock=40,
        sales_last_7_days=[2] * 7,
    )
    rec = seasonal_recommendation(product, date(2025, 1, 6))
    # clearance 70 * 1.32 is clamped to 60 + 15
    assert rec.base_discount == 70
    assert rec.discount == 75
