"""Deals registered by partner sellers."""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.models import TimeStampedModel


class Deal(TimeStampedModel):
    """A recorded sale awaiting or subject to administrative approval.

    ``points_earned`` and ``goals_earned`` mirror the deal's ledger entries;
    they are only written together with those entries.
    """

    class DealType(models.TextChoices):
        NEW_CUSTOMER = "new_customer", "Nouveau client"
        RENEWAL = "renewal", "Renouvellement"

    class Status(models.TextChoices):
        PENDING = "pending", "En attente"
        APPROVED = "approved", "Approuvee"
        REJECTED = "rejected", "Rejetee"

    class ProductType(models.TextChoices):
        SOFTWARE = "software", "Logiciel"
        HARDWARE = "hardware", "Materiel"
        EQUIPMENT = "equipment", "Equipement"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="deals",
        verbose_name="vendeur",
    )
    region_config = models.ForeignKey(
        "regions.RegionConfig",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="deals",
        verbose_name="configuration de region",
        help_text="Configuration resolue lors de la derniere approbation.",
    )
    product_type = models.CharField(
        "type de produit",
        max_length=20,
        choices=ProductType.choices,
        default=ProductType.SOFTWARE,
    )
    product_name = models.CharField("produit", max_length=200)
    deal_type = models.CharField(
        "type de vente",
        max_length=20,
        choices=DealType.choices,
        default=DealType.NEW_CUSTOMER,
    )
    deal_value = models.DecimalField(
        "montant (USD)",
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    quantity = models.PositiveIntegerField("quantite", default=1)
    close_date = models.DateField("date de cloture")
    client_info = models.TextField("client", blank=True, default="")
    license_agreement_number = models.CharField("numero de licence", max_length=100, blank=True, default="")
    status = models.CharField(
        "statut",
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    points_earned = models.IntegerField("points gagnes", default=0)
    goals_earned = models.DecimalField("buts gagnes", max_digits=10, decimal_places=2, default=Decimal("0"))
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="approved_deals",
        verbose_name="approuve par",
    )
    approved_at = models.DateTimeField("approuve le", null=True, blank=True)

    class Meta:
        verbose_name = "vente"
        verbose_name_plural = "ventes"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "approved_at"], name="deal_status_approved_idx"),
            models.Index(fields=["user", "status"], name="deal_user_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.product_name} ({self.get_deal_type_display()}, {self.deal_value} USD)"

    @property
    def is_approved(self) -> bool:
        return self.status == self.Status.APPROVED

    def snapshot(self) -> dict:
        """JSON-safe copy of the deal, used for audit records."""
        return {
            "id": self.pk,
            "user_id": str(self.user_id),
            "product_type": self.product_type,
            "product_name": self.product_name,
            "deal_type": self.deal_type,
            "deal_value": str(self.deal_value),
            "quantity": self.quantity,
            "close_date": self.close_date.isoformat() if self.close_date else None,
            "client_info": self.client_info,
            "license_agreement_number": self.license_agreement_number,
            "status": self.status,
            "points_earned": self.points_earned,
            "goals_earned": str(self.goals_earned),
            "approved_by_id": str(self.approved_by_id) if self.approved_by_id else None,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
            "region_config_id": self.region_config_id,
        }
