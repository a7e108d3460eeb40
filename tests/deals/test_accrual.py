from decimal import Decimal
from types import SimpleNamespace

import pytest

from deals.accrual import (
    calculate_goals,
    calculate_points,
    compute_accrual,
    goals_for_value,
    points_for_value,
    quantize_goals,
    rate_for_deal_type,
)

RATES = SimpleNamespace(new_customer_rate=1000, renewal_rate=2000)
CONFIG = SimpleNamespace(new_customer_goal_rate=1000, renewal_goal_rate=2000)


class TestPoints:
    @pytest.mark.parametrize("value,rate,expected", [
        (50000, 1000, 50),
        (1999, 1000, 1),
        (999.99, 1000, 0),
        ("160000", 2000, 80),
        (Decimal("2500.50"), 500, 5),
    ])
    def test_floor_of_value_over_rate(self, value, rate, expected):
        assert points_for_value(value, rate) == expected

    @pytest.mark.parametrize("value", [0, -10, "abc", None, "", float("nan"), True])
    def test_invalid_values_yield_zero(self, value):
        assert points_for_value(value, 1000) == 0

    @pytest.mark.parametrize("rate", [0, -1000, None, "x"])
    def test_invalid_rates_yield_zero(self, rate):
        assert points_for_value(50000, rate) == 0

    def test_deal_type_selects_rate(self):
        assert calculate_points("new_customer", 50000, RATES) == 50
        assert calculate_points("renewal", 50000, RATES) == 25

    def test_unknown_deal_type_uses_new_customer_rate(self):
        assert rate_for_deal_type("upsell", 1000, 2000) == 1000
        assert calculate_points("upsell", 50000, RATES) == 50

    def test_missing_rates_yield_zero(self):
        assert calculate_points("new_customer", 50000, None) == 0


class TestGoals:
    def test_new_customer_scenario(self):
        assert quantize_goals(calculate_goals("new_customer", 50000, CONFIG)) == Decimal("50.00")

    def test_renewal_scenario(self):
        assert quantize_goals(calculate_goals("renewal", 160000, CONFIG)) == Decimal("80.00")

    def test_goals_are_not_rounded_before_write(self):
        goals = goals_for_value(1000, 3)
        assert goals == Decimal(1000) / Decimal(3)
        assert goals != quantize_goals(goals)
        assert quantize_goals(goals) == Decimal("333.33")

    def test_rounding_is_half_up(self):
        assert quantize_goals(Decimal("0.125")) == Decimal("0.13")

    def test_unresolved_config_yields_zero(self):
        assert calculate_goals("new_customer", 50000, None) == Decimal("0")

    def test_invalid_value_yields_zero(self):
        assert calculate_goals("renewal", -5, CONFIG) == Decimal("0")
        assert calculate_goals("renewal", "n/a", CONFIG) == Decimal("0")

    def test_monotonic_in_deal_value(self):
        values = [0, 1, 999, 1000, 1500.5, 20000, 160000]
        goals = [calculate_goals("renewal", value, CONFIG) for value in values]
        assert goals == sorted(goals)


def test_compute_accrual_bundles_both_currencies():
    result = compute_accrual("new_customer", 50000, RATES, CONFIG)
    assert result.points == 50
    assert result.rounded_goals == Decimal("50.00")
    assert result.region_config is CONFIG
