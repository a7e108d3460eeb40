"""Re-derive stored accruals after a rate configuration change.

Each deal is processed in its own transaction with its row locked, so one
failing deal never blocks the rest and a concurrent approval of the same deal
is serialized. Running a job twice without a configuration change in between
updates nothing the second time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum

from deals.accrual import calculate_goals, calculate_points, quantize_goals
from deals.models import Deal
from ledger.models import GoalsLedgerEntry, PointsLedgerEntry
from ledger.services import record_goals, record_points, retract_goals, retract_points
from notifications.services import notify
from regions.rates import PointRates, RateTable, load_points_rates, resolve_for_user

logger = logging.getLogger(__name__)


@dataclass
class RecalculationResult:
    updated: int = 0
    errors: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {"updated": self.updated, "errors": list(self.errors)}


def _run(job_name: str, handler, context) -> RecalculationResult:
    result = RecalculationResult()
    deal_ids = list(Deal.objects.order_by("pk").values_list("pk", flat=True))
    for deal_id in deal_ids:
        try:
            with transaction.atomic():
                if handler(deal_id, context):
                    result.updated += 1
        except Exception as exc:
            logger.exception("%s failed for deal=%s", job_name, deal_id)
            result.errors.append(f"Failed to update deal {deal_id}: {exc}")
    logger.info(
        "%s finished: %d/%d deals updated, %d errors",
        job_name,
        result.updated,
        len(deal_ids),
        len(result.errors),
    )
    return result


def _lock_deal(deal_id) -> Deal | None:
    # The deal may have been deleted since the id snapshot was taken.
    return Deal.objects.select_for_update().filter(pk=deal_id).first()


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------

def _recalculate_deal_points(deal_id, rates_by_region: dict[str, PointRates]) -> bool:
    deal = _lock_deal(deal_id)
    if deal is None:
        return False

    entries = PointsLedgerEntry.objects.filter(deal_id=deal.pk)
    ledger_total = entries.aggregate(total=Sum("points"))["total"] or 0

    if deal.status == Deal.Status.APPROVED:
        rates = rates_by_region.get(deal.user.region) or PointRates.defaults()
        points = calculate_points(deal.deal_type, deal.deal_value, rates)
        if points == deal.points_earned and ledger_total == points:
            return False
        previous = deal.points_earned
        retract_points(deal.pk)
        record_points(deal, points)
        deal.points_earned = points
        deal.save(update_fields=["points_earned", "updated_at"])
        if points != previous:
            notify(
                deal.user_id,
                "points_adjusted",
                {
                    "deal_id": deal.pk,
                    "product_name": deal.product_name,
                    "points": points,
                    "previous_points": previous,
                },
            )
        return True

    if deal.points_earned == 0 and not entries.exists():
        return False
    retract_points(deal.pk)
    deal.points_earned = 0
    deal.save(update_fields=["points_earned", "updated_at"])
    return True


def recalculate_all_deal_points() -> RecalculationResult:
    """Bring every deal's ``points_earned`` and points entries in line with current rates."""
    return _run("points recalculation", _recalculate_deal_points, load_points_rates())


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

def _recalculate_deal_goals(deal_id, table: RateTable) -> bool:
    deal = _lock_deal(deal_id)
    if deal is None:
        return False

    entries = GoalsLedgerEntry.objects.filter(deal_id=deal.pk)

    if deal.status == Deal.Status.APPROVED:
        region_config = resolve_for_user(deal.user, table=table)
        goals = quantize_goals(calculate_goals(deal.deal_type, deal.deal_value, region_config))
        expected_entries = 1 if region_config is not None and goals > 0 else 0
        current = list(entries.values_list("goals", "region_config_id", "month", "year"))
        in_sync = (
            goals == deal.goals_earned
            and deal.region_config_id == getattr(region_config, "pk", None)
            and len(current) == expected_entries
            and all(
                row == (goals, region_config.pk, deal.close_date.month, deal.close_date.year)
                for row in current
            )
        )
        if in_sync:
            return False
        retract_goals(deal.pk)
        record_goals(deal, goals, region_config)
        deal.goals_earned = goals
        deal.region_config = region_config
        deal.save(update_fields=["goals_earned", "region_config", "updated_at"])
        return True

    if deal.goals_earned == 0 and not entries.exists():
        return False
    retract_goals(deal.pk)
    deal.goals_earned = Decimal("0.00")
    deal.save(update_fields=["goals_earned", "updated_at"])
    return True


def recalculate_all_deal_goals() -> RecalculationResult:
    """Bring every deal's ``goals_earned`` and goals entries in line with current region configs."""
    return _run("goals recalculation", _recalculate_deal_goals, RateTable.load())
