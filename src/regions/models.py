"""Rate configuration: goal rates per (region, category, subcategory), point rates per region."""
from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from accounts.models import Region, RegionCategory
from core.models import TimeStampedModel


class RegionConfig(TimeStampedModel):
    """Goal-rate tuple for one (region, category, subcategory) key.

    An empty ``subcategory`` is the "no subcategory" key; it only matches
    sellers who have no subcategory either.
    """

    name = models.CharField("nom", max_length=150)
    region = models.CharField("region", max_length=20, choices=Region.choices)
    category = models.CharField("segment de marche", max_length=20, choices=RegionCategory.choices)
    subcategory = models.CharField("sous-categorie", max_length=100, blank=True, default="")
    new_customer_goal_rate = models.PositiveIntegerField(
        "montant par but (nouveau client)",
        default=1000,
        validators=[MinValueValidator(1)],
    )
    renewal_goal_rate = models.PositiveIntegerField(
        "montant par but (renouvellement)",
        default=2000,
        validators=[MinValueValidator(1)],
    )
    monthly_goal_target = models.PositiveIntegerField("objectif mensuel (buts)", null=True, blank=True)
    is_active = models.BooleanField("actif", default=True)
    expiration_date = models.DateField("date d'expiration", null=True, blank=True)

    class Meta:
        verbose_name = "configuration de region"
        verbose_name_plural = "configurations de region"
        ordering = ["region", "category", "subcategory"]
        constraints = [
            models.UniqueConstraint(
                fields=["region", "category", "subcategory"],
                name="uniq_region_config_key",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.region, self.category, self.subcategory or "")

    def save(self, *args, **kwargs):
        # None and "" must collapse to the same key or the unique constraint leaks.
        self.subcategory = (self.subcategory or "").strip()
        super().save(*args, **kwargs)


class PointsConfig(TimeStampedModel):
    """Per-region deal-value-per-point rates."""

    region = models.CharField("region", max_length=20, choices=Region.choices)
    new_customer_rate = models.PositiveIntegerField(
        "montant par point (nouveau client)",
        default=1000,
        validators=[MinValueValidator(1)],
    )
    renewal_rate = models.PositiveIntegerField(
        "montant par point (renouvellement)",
        default=2000,
        validators=[MinValueValidator(1)],
    )
    grand_prize_threshold = models.PositiveIntegerField("seuil grand prix", default=50000)
    is_active = models.BooleanField("actif", default=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="modifie par",
    )

    class Meta:
        verbose_name = "bareme de points"
        verbose_name_plural = "baremes de points"
        ordering = ["region"]
        constraints = [
            models.UniqueConstraint(
                fields=["region"],
                condition=models.Q(is_active=True),
                name="uniq_active_points_config_per_region",
            ),
        ]

    def __str__(self) -> str:
        return f"Bareme {self.region} ({self.new_customer_rate}/{self.renewal_rate})"
