"""Ledger manager: record and retract accrual entries for deals.

Every helper here expects to run inside the caller's transaction, with the
deal row already locked. Retracting then recording the same deal therefore
always leaves at most one points entry and one goals entry for it.
"""
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum

from deals.accrual import quantize_goals
from ledger.models import GoalsLedgerEntry, PointsLedgerEntry

logger = logging.getLogger("partnercup")


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------

def record_points(deal, points: int, description: str | None = None) -> PointsLedgerEntry | None:
    if points <= 0:
        return None
    return PointsLedgerEntry.objects.create(
        user_id=deal.user_id,
        deal=deal,
        points=points,
        description=description or f"Vente approuvee : {deal.product_name}",
    )


def record_goals(deal, goals, region_config, description: str | None = None) -> GoalsLedgerEntry | None:
    """Write the goals entry for ``deal``, attributed to its close-date month.

    Nothing is written without a resolved config or when goals round to zero.
    """
    if region_config is None:
        return None
    rounded = quantize_goals(goals)
    if rounded <= 0:
        return None
    return GoalsLedgerEntry.objects.create(
        user_id=deal.user_id,
        deal=deal,
        goals=rounded,
        month=deal.close_date.month,
        year=deal.close_date.year,
        region_config=region_config,
        description=description or f"Buts pour la vente : {deal.product_name}",
    )


def record_accrual(deal, points: int, goals, region_config):
    """Record the points and goals entries of an approved deal.

    Returns
    -------
    tuple
        ``(points_entry, goals_entry)``; either may be ``None``.
    """
    return (
        record_points(deal, points),
        record_goals(deal, goals, region_config),
    )


# ---------------------------------------------------------------------------
# Retraction
# ---------------------------------------------------------------------------

def retract_points(deal_id) -> int:
    deleted, _ = PointsLedgerEntry.objects.filter(deal_id=deal_id).delete()
    return deleted


def retract_goals(deal_id) -> int:
    deleted, _ = GoalsLedgerEntry.objects.filter(deal_id=deal_id).delete()
    return deleted


def retract_accrual(deal_id) -> tuple[int, int]:
    """Delete every ledger entry referencing ``deal_id``."""
    points_deleted = retract_points(deal_id)
    goals_deleted = retract_goals(deal_id)
    if points_deleted or goals_deleted:
        logger.debug(
            "Retracted %d points and %d goals entries for deal=%s",
            points_deleted,
            goals_deleted,
            deal_id,
        )
    return points_deleted, goals_deleted


# ---------------------------------------------------------------------------
# Redemptions
# ---------------------------------------------------------------------------

@transaction.atomic
def record_points_debit(user, points: int, description: str) -> PointsLedgerEntry:
    """Debit ``points`` from a seller's balance (reward redemption).

    Raises
    ------
    ValueError
        If ``points`` is not positive or exceeds the available balance.
    """
    if points <= 0:
        raise ValueError("Le nombre de points a debiter doit etre positif.")

    # Lock the seller row so two redemptions cannot overdraw the balance.
    from accounts.models import User

    locked_user = User.objects.select_for_update().get(pk=user.pk)
    available = user_available_points(locked_user)
    if points > available:
        raise ValueError(
            f"Solde de points insuffisant ({available} disponibles, {points} demandes)."
        )
    return PointsLedgerEntry.objects.create(
        user=locked_user,
        points=-points,
        description=description,
    )


# ---------------------------------------------------------------------------
# Read helpers
# ---------------------------------------------------------------------------

def user_total_points(user) -> int:
    total = PointsLedgerEntry.objects.filter(user=user).aggregate(total=Sum("points"))["total"]
    return total or 0


def user_available_points(user) -> int:
    return max(0, user_total_points(user))


def user_earned_points(user, start: datetime | None = None, end: datetime | None = None) -> int:
    """Sum of positive entries only; redemptions never reduce earned points."""
    qs = PointsLedgerEntry.objects.filter(user=user, points__gt=0)
    if start is not None:
        qs = qs.filter(created_at__gte=start)
    if end is not None:
        qs = qs.filter(created_at__lte=end)
    return qs.aggregate(total=Sum("points"))["total"] or 0


def user_goals_for_month(user, month: int, year: int) -> Decimal:
    total = (
        GoalsLedgerEntry.objects
        .filter(user=user, month=month, year=year)
        .aggregate(total=Sum("goals"))["total"]
    )
    return quantize_goals(total or 0)
