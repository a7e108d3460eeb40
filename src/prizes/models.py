"""Grand prize criteria, awarded winners and monthly regional prizes."""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimeStampedModel

ALL_REGIONS = "all"


class GrandPrizeCriteria(TimeStampedModel):
    """Selection and scoring rule for the grand prize.

    Every filter is optional: blank means "no restriction" and the region
    also accepts the ``"all"`` sentinel. At most one criteria is active at a
    time; ``prizes.services`` deactivates the others when one is activated
    and a partial unique index backs it up.
    """

    class CriteriaType(models.TextChoices):
        POINTS = "points", "Points"
        DEALS = "deals", "Nombre de ventes"
        COMBINED = "combined", "Combine"
        TOP_GOALS = "top_goals", "Meilleur buteur"

    name = models.CharField("nom", max_length=200)
    criteria_type = models.CharField(
        "type de critere",
        max_length=20,
        choices=CriteriaType.choices,
        default=CriteriaType.COMBINED,
    )
    region = models.CharField("region", max_length=20, blank=True, default="")
    market_segment = models.CharField("segment de marche", max_length=20, blank=True, default="")
    partner_category = models.CharField("categorie partenaire", max_length=50, blank=True, default="")
    region_subcategory = models.CharField("sous-region", max_length=100, blank=True, default="")
    min_points = models.PositiveIntegerField("points minimum", null=True, blank=True)
    min_deals = models.PositiveIntegerField("ventes minimum", null=True, blank=True)
    points_weight = models.PositiveSmallIntegerField(
        "poids des points (%)",
        default=60,
        validators=[MaxValueValidator(100)],
    )
    deals_weight = models.PositiveSmallIntegerField(
        "poids des ventes (%)",
        default=40,
        validators=[MaxValueValidator(100)],
    )
    start_date = models.DateTimeField("debut de la periode", null=True, blank=True)
    end_date = models.DateTimeField("fin de la periode", null=True, blank=True)
    redemption_start_date = models.DateTimeField("debut de retrait", null=True, blank=True)
    redemption_end_date = models.DateTimeField("fin de retrait", null=True, blank=True)
    ranking_position = models.PositiveSmallIntegerField("places primees", default=1)
    prize_description = models.TextField("description du prix", blank=True, default="")
    is_active = models.BooleanField("actif", default=False)

    class Meta:
        verbose_name = "critere du grand prix"
        verbose_name_plural = "criteres du grand prix"
        ordering = ["-is_active", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_active"],
                condition=models.Q(is_active=True),
                name="single_active_grand_prize_criteria",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class GrandPrizeWinner(TimeStampedModel):
    """Frozen ranking line of an awarded criteria."""

    criteria = models.ForeignKey(
        GrandPrizeCriteria,
        on_delete=models.CASCADE,
        related_name="winners",
        verbose_name="critere",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="grand_prize_wins",
        verbose_name="gagnant",
    )
    points = models.IntegerField("points")
    deals = models.IntegerField("ventes")
    goals = models.DecimalField("buts", max_digits=12, decimal_places=2, default=Decimal("0"))
    score = models.DecimalField("score", max_digits=14, decimal_places=2)
    rank = models.PositiveIntegerField("rang")
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        verbose_name = "gagnant du grand prix"
        verbose_name_plural = "gagnants du grand prix"
        ordering = ["criteria", "rank"]
        constraints = [
            models.UniqueConstraint(
                fields=["criteria", "user"],
                name="uniq_grand_prize_winner",
            ),
        ]

    def __str__(self) -> str:
        return f"#{self.rank} {self.user} ({self.criteria})"


class MonthlyRegionPrize(TimeStampedModel):
    """Prize for a rank of the monthly goals ranking of one region config."""

    region_config = models.ForeignKey(
        "regions.RegionConfig",
        on_delete=models.CASCADE,
        related_name="monthly_prizes",
        verbose_name="configuration de region",
    )
    month = models.PositiveSmallIntegerField(
        "mois",
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )
    year = models.PositiveSmallIntegerField("annee")
    rank = models.PositiveSmallIntegerField("rang", default=1)
    prize_name = models.CharField("prix", max_length=200)
    prize_description = models.TextField("description", blank=True, default="")
    prize_value = models.DecimalField("valeur", max_digits=10, decimal_places=2, null=True, blank=True)
    goal_target = models.PositiveIntegerField("objectif (buts)")
    redemption_start_date = models.DateTimeField("debut de retrait", null=True, blank=True)
    redemption_end_date = models.DateTimeField("fin de retrait", null=True, blank=True)
    is_active = models.BooleanField("actif", default=True)

    class Meta:
        verbose_name = "prix mensuel"
        verbose_name_plural = "prix mensuels"
        ordering = ["-year", "-month", "rank"]
        constraints = [
            models.UniqueConstraint(
                fields=["region_config", "month", "year", "rank"],
                name="uniq_monthly_prize_rank",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.prize_name} ({self.month:02d}/{self.year}, rang {self.rank})"
