"""Write-side services for prize criteria and winners.

The single-active-criteria rule lives here: every path that can set
``is_active=True`` locks the currently active rows and deactivates them in
the same transaction. The partial unique index on ``is_active`` rejects
whatever a race would still let through.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction

from prizes.models import GrandPrizeCriteria, GrandPrizeWinner

logger = logging.getLogger("partnercup")

CRITERIA_FIELDS = {
    "name",
    "criteria_type",
    "region",
    "market_segment",
    "partner_category",
    "region_subcategory",
    "min_points",
    "min_deals",
    "points_weight",
    "deals_weight",
    "start_date",
    "end_date",
    "redemption_start_date",
    "redemption_end_date",
    "ranking_position",
    "prize_description",
    "is_active",
}


def validate_weights(criteria_type: str, points_weight, deals_weight) -> None:
    """Reject a combined criteria whose weights do not add up to 100."""
    if criteria_type != GrandPrizeCriteria.CriteriaType.COMBINED:
        return
    points_weight = 60 if points_weight is None else points_weight
    deals_weight = 40 if deals_weight is None else deals_weight
    if points_weight + deals_weight != 100:
        raise ValueError("La somme des poids points/ventes doit etre egale a 100.")


def _check_fields(fields: dict) -> None:
    unknown = set(fields) - CRITERIA_FIELDS
    if unknown:
        raise ValueError(f"Champs inconnus : {', '.join(sorted(unknown))}.")


def _deactivate_others(exclude_pk=None) -> int:
    active = GrandPrizeCriteria.objects.select_for_update().filter(is_active=True)
    if exclude_pk is not None:
        active = active.exclude(pk=exclude_pk)
    # Evaluate to take the row locks before the UPDATE.
    locked = [criteria.pk for criteria in active]
    if not locked:
        return 0
    return GrandPrizeCriteria.objects.filter(pk__in=locked).update(is_active=False)


def get_active_criteria() -> GrandPrizeCriteria | None:
    return GrandPrizeCriteria.objects.filter(is_active=True).first()


@transaction.atomic
def create_criteria(**fields) -> GrandPrizeCriteria:
    """Create a criteria, active by default, deactivating any other active one."""
    _check_fields(fields)
    fields.setdefault("is_active", True)
    validate_weights(
        fields.get("criteria_type", GrandPrizeCriteria.CriteriaType.COMBINED),
        fields.get("points_weight"),
        fields.get("deals_weight"),
    )
    if fields.get("points_weight") is None:
        fields.pop("points_weight", None)
    if fields.get("deals_weight") is None:
        fields.pop("deals_weight", None)

    if fields["is_active"]:
        deactivated = _deactivate_others()
        if deactivated:
            logger.info("Deactivated %d grand prize criteria", deactivated)
    criteria = GrandPrizeCriteria.objects.create(**fields)
    logger.info("Grand prize criteria %s created (active=%s)", criteria.pk, criteria.is_active)
    return criteria


@transaction.atomic
def update_criteria(criteria_id, **fields) -> GrandPrizeCriteria:
    _check_fields(fields)
    criteria = GrandPrizeCriteria.objects.select_for_update().get(pk=criteria_id)
    validate_weights(
        fields.get("criteria_type", criteria.criteria_type),
        fields.get("points_weight", criteria.points_weight),
        fields.get("deals_weight", criteria.deals_weight),
    )
    if fields.get("is_active"):
        _deactivate_others(exclude_pk=criteria.pk)
    for name, value in fields.items():
        setattr(criteria, name, value)
    criteria.save()
    return criteria


@transaction.atomic
def activate_criteria(criteria_id) -> GrandPrizeCriteria:
    """Make ``criteria_id`` the only active criteria."""
    criteria = GrandPrizeCriteria.objects.select_for_update().get(pk=criteria_id)
    _deactivate_others(exclude_pk=criteria.pk)
    if not criteria.is_active:
        criteria.is_active = True
        criteria.save(update_fields=["is_active", "updated_at"])
    logger.info("Grand prize criteria %s activated", criteria.pk)
    return criteria


def delete_criteria(criteria_id) -> None:
    GrandPrizeCriteria.objects.get(pk=criteria_id).delete()


@transaction.atomic
def award_grand_prize(criteria_id, notes: str = "") -> list[GrandPrizeWinner]:
    """Freeze the top ``ranking_position`` entries of a criteria as winners.

    Re-awarding replaces the previous winners of the same criteria.
    """
    from prizes.ranking import get_ranking

    criteria = GrandPrizeCriteria.objects.select_for_update().get(pk=criteria_id)
    entries = get_ranking(criteria.pk)[: max(criteria.ranking_position, 1)]

    GrandPrizeWinner.objects.filter(criteria=criteria).delete()
    winners = GrandPrizeWinner.objects.bulk_create([
        GrandPrizeWinner(
            criteria=criteria,
            user=entry.user,
            points=entry.points,
            deals=entry.deals,
            goals=entry.goals,
            score=entry.score.quantize(Decimal("0.01")),
            rank=entry.rank,
            notes=notes,
        )
        for entry in entries
    ])
    logger.info("Grand prize criteria %s awarded to %d sellers", criteria.pk, len(winners))
    return winners


def monthly_goal_progress(user, month: int, year: int) -> dict:
    """Goals of ``user`` in an attribution month against their region's monthly target."""
    from ledger.services import user_goals_for_month
    from regions.rates import resolve_for_user

    region_config = resolve_for_user(user)
    goals = user_goals_for_month(user, month, year)
    target = region_config.monthly_goal_target if region_config else None
    percent = None
    if target:
        percent = min(Decimal("100"), (goals * 100 / Decimal(target))).quantize(Decimal("0.01"))
    return {
        "month": month,
        "year": year,
        "goals": goals,
        "target": target,
        "percent": percent,
        "reached": bool(target) and goals >= target,
        "region_config": region_config,
    }
