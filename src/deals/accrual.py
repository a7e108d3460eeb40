"""Accrual arithmetic: deal value to points and goals.

Everything here is pure and total. Invalid input (non-numeric or
non-positive values, non-positive rates, a missing region config) yields
zero instead of raising; validation happens at the write boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

NEW_CUSTOMER = "new_customer"
RENEWAL = "renewal"

GOALS_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal | None:
    """Coerce ``value`` to a finite Decimal, or ``None`` when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError):
            return None
    if not result.is_finite():
        return None
    return result


def rate_for_deal_type(deal_type: str, new_customer_rate, renewal_rate):
    """Pick the rate for a deal type.

    Anything other than ``renewal`` uses the new-customer rate, including
    unrecognised legacy types.
    """
    if deal_type == RENEWAL:
        return renewal_rate
    return new_customer_rate


def points_for_value(deal_value, rate) -> int:
    """``floor(deal_value / rate)``, or 0 for invalid input."""
    value = to_decimal(deal_value)
    divisor = to_decimal(rate)
    if value is None or divisor is None or value <= 0 or divisor <= 0:
        return 0
    return int((value / divisor).to_integral_value(rounding=ROUND_FLOOR))


def goals_for_value(deal_value, rate) -> Decimal:
    """``deal_value / rate`` as an unrounded Decimal, or 0 for invalid input."""
    value = to_decimal(deal_value)
    divisor = to_decimal(rate)
    if value is None or divisor is None or value <= 0 or divisor <= 0:
        return ZERO
    return value / divisor


def calculate_points(deal_type: str, deal_value, rates) -> int:
    """Points for a deal given an object exposing ``new_customer_rate``/``renewal_rate``."""
    if rates is None:
        return 0
    rate = rate_for_deal_type(deal_type, rates.new_customer_rate, rates.renewal_rate)
    return points_for_value(deal_value, rate)


def calculate_goals(deal_type: str, deal_value, region_config) -> Decimal:
    """Goals for a deal under a resolved region config; 0 when unresolved."""
    if region_config is None:
        return ZERO
    rate = rate_for_deal_type(
        deal_type,
        region_config.new_customer_goal_rate,
        region_config.renewal_goal_rate,
    )
    return goals_for_value(deal_value, rate)


def quantize_goals(goals) -> Decimal:
    """Round goals to 2 places (half up). Only applied when persisting."""
    value = to_decimal(goals)
    if value is None:
        return ZERO.quantize(GOALS_QUANTUM)
    return value.quantize(GOALS_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class AccrualResult:
    points: int
    goals: Decimal
    region_config: Any = None

    @property
    def rounded_goals(self) -> Decimal:
        return quantize_goals(self.goals)


def compute_accrual(deal_type: str, deal_value, point_rates, region_config) -> AccrualResult:
    return AccrualResult(
        points=calculate_points(deal_type, deal_value, point_rates),
        goals=calculate_goals(deal_type, deal_value, region_config),
        region_config=region_config,
    )
