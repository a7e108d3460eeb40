"""Ranking engine for grand and monthly prizes.

Read-only: aggregates approved deals (and, for ``top_goals``, the goals
ledger), applies the optional filters as independent AND-ed predicates,
scores each seller and ranks them. Equal scores are not collapsed: they get
distinct consecutive ranks following input order (earliest registered seller
first).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from django.db.models import Count, F, Sum

from prizes.models import ALL_REGIONS, GrandPrizeCriteria

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
ZERO = Decimal("0")

CriteriaType = GrandPrizeCriteria.CriteriaType


def _unrestricted(value) -> bool:
    return value is None or not str(value).strip() or str(value).strip().lower() == ALL_REGIONS


def _period_index(year: int, month: int) -> int:
    return year * 12 + month


@dataclass(frozen=True)
class RankingFilters:
    """Typed filter set. ``None`` / blank fields do not restrict."""

    criteria_type: str = CriteriaType.POINTS
    region: str | None = None
    market_segment: str | None = None
    partner_category: str | None = None
    region_subcategory: str | None = None
    min_points: int | None = None
    min_deals: int | None = None
    start: datetime | None = None
    end: datetime | None = None
    points_weight: int = 60
    deals_weight: int = 40
    # Periodic prizes: restrict goals to one region config and attribution month.
    region_config_id: int | None = None
    month: int | None = None
    year: int | None = None

    @classmethod
    def from_criteria(cls, criteria: GrandPrizeCriteria) -> "RankingFilters":
        return cls(
            criteria_type=criteria.criteria_type,
            region=criteria.region or None,
            market_segment=criteria.market_segment or None,
            partner_category=criteria.partner_category or None,
            region_subcategory=criteria.region_subcategory or None,
            min_points=criteria.min_points,
            min_deals=criteria.min_deals,
            start=criteria.start_date,
            end=criteria.end_date,
            points_weight=60 if criteria.points_weight is None else criteria.points_weight,
            deals_weight=40 if criteria.deals_weight is None else criteria.deals_weight,
        )

    def matches_user(self, user: "User") -> bool:
        predicates = (
            (self.region, user.region),
            (self.market_segment, user.region_category),
            (self.partner_category, user.partner_category),
            (self.region_subcategory, user.region_subcategory),
        )
        return all(
            _unrestricted(expected) or (actual or "") == expected
            for expected, actual in predicates
        )

    def meets_thresholds(self, points: int, deals: int) -> bool:
        if self.min_points and points < self.min_points:
            return False
        if self.min_deals and deals < self.min_deals:
            return False
        return True


@dataclass
class RankingEntry:
    user: Any
    points: int = 0
    deals: int = 0
    goals: Decimal = ZERO
    score: Decimal = ZERO
    rank: int = 0


def score_entry(criteria_type: str, points: int, deals: int, goals: Decimal,
                points_weight: int = 60, deals_weight: int = 40) -> Decimal:
    """Score for one seller. Weights are used as given, never normalised."""
    if criteria_type == CriteriaType.DEALS:
        return Decimal(deals)
    if criteria_type == CriteriaType.COMBINED:
        return (
            Decimal(points) * Decimal(points_weight) / HUNDRED
            + Decimal(deals) * Decimal(deals_weight) / HUNDRED
        )
    if criteria_type == CriteriaType.TOP_GOALS:
        return Decimal(goals)
    return Decimal(points)


def rank_entries(entries: list[RankingEntry]) -> list[RankingEntry]:
    """Stable sort by descending score, then number ranks from 1."""
    ordered = sorted(entries, key=lambda entry: entry.score, reverse=True)
    for rank, entry in enumerate(ordered, start=1):
        entry.rank = rank
    return ordered


class RankingEngine:
    """Compute rankings for a :class:`RankingFilters` set."""

    def __init__(self, filters: RankingFilters) -> None:
        self.filters = filters

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute(self) -> list[RankingEntry]:
        from accounts.models import User

        totals = self._aggregate_deals()
        if self.filters.criteria_type == CriteriaType.TOP_GOALS:
            goals_by_user = self._aggregate_goals()
            for user_id, goals in goals_by_user.items():
                totals.setdefault(user_id, {"points": 0, "deals": 0, "goals": ZERO})
                totals[user_id]["goals"] = goals
            for user_id, row in totals.items():
                if user_id not in goals_by_user:
                    row["goals"] = ZERO

        if not totals:
            return []

        users = User.objects.in_bulk(list(totals))
        entries = []
        for user_id in sorted(totals, key=lambda pk: (users[pk].date_joined, str(pk))):
            user = users[user_id]
            row = totals[user_id]
            if not self.filters.matches_user(user):
                continue
            if not self.filters.meets_thresholds(row["points"], row["deals"]):
                continue
            entries.append(
                RankingEntry(
                    user=user,
                    points=row["points"],
                    deals=row["deals"],
                    goals=row["goals"],
                    score=score_entry(
                        self.filters.criteria_type,
                        row["points"],
                        row["deals"],
                        row["goals"],
                        self.filters.points_weight,
                        self.filters.deals_weight,
                    ),
                )
            )
        return rank_entries(entries)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def _aggregate_deals(self) -> dict:
        from deals.models import Deal

        qs = Deal.objects.filter(status=Deal.Status.APPROVED)
        if self.filters.start is not None:
            qs = qs.filter(approved_at__gte=self.filters.start)
        if self.filters.end is not None:
            qs = qs.filter(approved_at__lte=self.filters.end)
        if self.filters.region_config_id is not None:
            qs = qs.filter(region_config_id=self.filters.region_config_id)
        if self.filters.month is not None and self.filters.year is not None:
            qs = qs.filter(close_date__month=self.filters.month, close_date__year=self.filters.year)

        rows = (
            qs.values("user_id")
            .annotate(points=Sum("points_earned"), deals=Count("id"), goals=Sum("goals_earned"))
            .order_by()
        )
        return {
            row["user_id"]: {
                "points": row["points"] or 0,
                "deals": row["deals"] or 0,
                "goals": row["goals"] or ZERO,
            }
            for row in rows
        }

    def _aggregate_goals(self) -> dict:
        from ledger.models import GoalsLedgerEntry

        qs = GoalsLedgerEntry.objects.all()
        if self.filters.region_config_id is not None:
            qs = qs.filter(region_config_id=self.filters.region_config_id)
        if self.filters.month is not None and self.filters.year is not None:
            qs = qs.filter(month=self.filters.month, year=self.filters.year)
        if self.filters.start is not None or self.filters.end is not None:
            qs = qs.annotate(period=F("year") * 12 + F("month"))
            if self.filters.start is not None:
                qs = qs.filter(period__gte=_period_index(self.filters.start.year, self.filters.start.month))
            if self.filters.end is not None:
                qs = qs.filter(period__lte=_period_index(self.filters.end.year, self.filters.end.month))

        rows = qs.values("user_id").annotate(goals=Sum("goals")).order_by()
        return {row["user_id"]: row["goals"] or ZERO for row in rows}


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def get_ranking(criteria_id) -> list[RankingEntry]:
    """Ranking for a stored criteria.

    Raises
    ------
    GrandPrizeCriteria.DoesNotExist
        If no criteria has this id.
    """
    criteria = GrandPrizeCriteria.objects.get(pk=criteria_id)
    entries = RankingEngine(RankingFilters.from_criteria(criteria)).compute()
    logger.debug("Ranking for criteria=%s: %d entries", criteria_id, len(entries))
    return entries


def monthly_goals_ranking(region_config, month: int, year: int) -> list[RankingEntry]:
    """Top scorers of one region config for an attribution month."""
    filters = RankingFilters(
        criteria_type=CriteriaType.TOP_GOALS,
        region_config_id=region_config.pk,
        month=month,
        year=year,
    )
    return RankingEngine(filters).compute()


def user_ranking_report(start: datetime | None = None, end: datetime | None = None,
                        region: str | None = None) -> list[RankingEntry]:
    """Earned-points leaderboard built from positive points entries.

    Redemptions (negative entries) never lower a seller's position.
    """
    from accounts.models import User
    from deals.models import Deal
    from ledger.models import PointsLedgerEntry

    points_qs = PointsLedgerEntry.objects.filter(points__gt=0)
    deals_qs = Deal.objects.filter(status=Deal.Status.APPROVED)
    if start is not None:
        points_qs = points_qs.filter(created_at__gte=start)
        deals_qs = deals_qs.filter(approved_at__gte=start)
    if end is not None:
        points_qs = points_qs.filter(created_at__lte=end)
        deals_qs = deals_qs.filter(approved_at__lte=end)

    points = dict(points_qs.values("user_id").annotate(total=Sum("points")).order_by().values_list("user_id", "total"))
    deals = dict(deals_qs.values("user_id").annotate(total=Count("id")).order_by().values_list("user_id", "total"))

    users = User.objects.filter(pk__in=set(points) | set(deals))
    if not _unrestricted(region):
        users = users.filter(region=region)

    entries = [
        RankingEntry(
            user=user,
            points=points.get(user.pk, 0),
            deals=deals.get(user.pk, 0),
            score=Decimal(points.get(user.pk, 0)),
        )
        for user in users.order_by("date_joined", "id")
    ]
    return rank_entries(entries)
