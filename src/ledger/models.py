"""Append/remove ledgers of points and goals accruals.

Entries are never updated in place. Recalculation deletes the entries of a
deal and writes fresh ones, so totals can always be rebuilt from the rows.
"""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class ImmutableEntryMixin:
    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            raise ValueError("Les ecritures du grand livre sont immuables.")
        super().save(*args, **kwargs)


class PointsLedgerEntry(ImmutableEntryMixin, models.Model):
    """Signed points movement. Positive = earned on a deal, negative = redeemed."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="points_entries",
        verbose_name="vendeur",
    )
    deal = models.ForeignKey(
        "deals.Deal",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="points_entries",
        verbose_name="vente",
    )
    points = models.IntegerField("points")
    description = models.CharField("description", max_length=255)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "ecriture de points"
        verbose_name_plural = "ecritures de points"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="points_user_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.points:+d} pts - {self.description}"


class GoalsLedgerEntry(ImmutableEntryMixin, models.Model):
    """Goals earned on an approved deal, attributed to the deal's close month."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="goals_entries",
        verbose_name="vendeur",
    )
    deal = models.ForeignKey(
        "deals.Deal",
        on_delete=models.CASCADE,
        related_name="goals_entries",
        verbose_name="vente",
    )
    goals = models.DecimalField(
        "buts",
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    month = models.PositiveSmallIntegerField(
        "mois",
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )
    year = models.PositiveSmallIntegerField("annee")
    region_config = models.ForeignKey(
        "regions.RegionConfig",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="goals_entries",
        verbose_name="configuration de region",
    )
    description = models.CharField("description", max_length=255)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "ecriture de buts"
        verbose_name_plural = "ecritures de buts"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["year", "month"], name="goals_period_idx"),
            models.Index(fields=["user", "year", "month"], name="goals_user_period_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.goals} buts ({self.month:02d}/{self.year}) - {self.description}"
