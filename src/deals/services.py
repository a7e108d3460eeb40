"""Deal lifecycle: creation, approval, rejection and deletion.

Approval and rejection lock the deal row with ``select_for_update()`` for the
whole read -> compute -> retract -> write -> persist sequence, so a
concurrent recalculation of the same deal is serialized behind it. Ledger
entries of a deal are always retracted before new ones are recorded, which
makes approving an already-approved deal safe.
"""
from __future__ import annotations

import logging
from datetime import date

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.services import record_audit_event
from deals.accrual import AccrualResult, compute_accrual, quantize_goals, to_decimal
from deals.models import Deal
from ledger.services import record_accrual, retract_accrual
from notifications.services import notify
from regions.rates import RateTable, points_rates_for_region, resolve_for_user

logger = logging.getLogger("partnercup")

EDITABLE_FIELDS = (
    "product_type",
    "product_name",
    "quantity",
    "client_info",
    "license_agreement_number",
)
# Only editable while the deal is pending: they feed the accrual.
PENDING_ONLY_FIELDS = ("deal_type", "deal_value", "close_date")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _clean_deal_value(value):
    amount = to_decimal(value)
    if amount is None or amount <= 0:
        raise ValueError("Le montant de la vente doit etre strictement positif.")
    return amount


def _clean_deal_type(deal_type):
    if deal_type not in Deal.DealType.values:
        raise ValueError(f"Type de vente inconnu : {deal_type}.")
    return deal_type


def _clean_quantity(quantity):
    if quantity is None or int(quantity) < 1:
        raise ValueError("La quantite doit etre au moins 1.")
    return int(quantity)


# ---------------------------------------------------------------------------
# create_deal / update_deal
# ---------------------------------------------------------------------------

def create_deal(
    user,
    *,
    product_name: str,
    deal_value,
    close_date: date,
    deal_type: str = Deal.DealType.NEW_CUSTOMER,
    product_type: str = Deal.ProductType.SOFTWARE,
    quantity: int = 1,
    client_info: str = "",
    license_agreement_number: str = "",
) -> Deal:
    """Register a pending deal for ``user``.

    Raises
    ------
    ValueError
        If the value is not strictly positive, the deal type is unknown or
        the quantity is below 1.
    """
    if close_date is None:
        raise ValueError("La date de cloture est obligatoire.")
    deal = Deal.objects.create(
        user=user,
        product_name=product_name,
        product_type=product_type,
        deal_type=_clean_deal_type(deal_type),
        deal_value=_clean_deal_value(deal_value),
        quantity=_clean_quantity(quantity),
        close_date=close_date,
        client_info=client_info,
        license_agreement_number=license_agreement_number,
    )
    logger.info("Deal %s created by user=%s value=%s", deal.pk, user.pk, deal.deal_value)
    return deal


@transaction.atomic
def update_deal(deal_id, **fields) -> Deal:
    """Edit a deal's descriptive fields. Never touches its accrual."""
    deal = Deal.objects.select_for_update().get(pk=deal_id)

    allowed = set(EDITABLE_FIELDS)
    if deal.status == Deal.Status.PENDING:
        allowed |= set(PENDING_ONLY_FIELDS)
    forbidden = set(fields) - allowed
    if forbidden:
        raise ValueError(
            f"Champs non modifiables pour une vente {deal.get_status_display().lower()} : "
            f"{', '.join(sorted(forbidden))}."
        )

    if "deal_value" in fields:
        fields["deal_value"] = _clean_deal_value(fields["deal_value"])
    if "deal_type" in fields:
        fields["deal_type"] = _clean_deal_type(fields["deal_type"])
    if "quantity" in fields:
        fields["quantity"] = _clean_quantity(fields["quantity"])

    for name, value in fields.items():
        setattr(deal, name, value)
    if fields:
        deal.save(update_fields=[*fields, "updated_at"])
    return deal


# ---------------------------------------------------------------------------
# Accrual for a single deal
# ---------------------------------------------------------------------------

def compute_deal_accrual(deal: Deal, table: RateTable | None = None) -> AccrualResult:
    """Points from the owner's region rates, goals from the resolved region config."""
    user = deal.user
    point_rates = points_rates_for_region(user.region)
    region_config = None
    if user.has_rate_key:
        region_config = resolve_for_user(user, table=table)
    if region_config is None:
        logger.warning(
            "No region config for user=%s (%s/%s/%s): deal=%s accrues zero goals",
            user.pk,
            user.region or "-",
            user.region_category or "-",
            user.region_subcategory or "-",
            deal.pk,
        )
    return compute_accrual(deal.deal_type, deal.deal_value, point_rates, region_config)


def _notify_decision(deal: Deal, kind: str) -> None:
    if not settings.NOTIFY_ON_DEAL_DECISION:
        return
    notify(
        deal.user_id,
        kind,
        {
            "deal_id": deal.pk,
            "product_name": deal.product_name,
            "status": deal.status,
            "points": deal.points_earned,
            "goals": str(deal.goals_earned),
        },
    )


# ---------------------------------------------------------------------------
# approve_deal / reject_deal
# ---------------------------------------------------------------------------

@transaction.atomic
def approve_deal(deal_id, approver) -> Deal:
    """Approve a deal and record its points and goals.

    Parameters
    ----------
    deal_id : int
        Primary key of the deal.
    approver : User
        Administrator taking the decision.

    Returns
    -------
    Deal
        The approved deal.

    Raises
    ------
    Deal.DoesNotExist
        If no deal has this id.
    """
    deal = Deal.objects.select_for_update().get(pk=deal_id)
    accrual = compute_deal_accrual(deal)

    retract_accrual(deal.pk)

    deal.status = Deal.Status.APPROVED
    deal.points_earned = accrual.points
    deal.goals_earned = accrual.rounded_goals
    deal.region_config = accrual.region_config
    deal.approved_by = approver
    deal.approved_at = timezone.now()
    deal.save(update_fields=[
        "status",
        "points_earned",
        "goals_earned",
        "region_config",
        "approved_by",
        "approved_at",
        "updated_at",
    ])

    record_accrual(deal, accrual.points, accrual.goals, accrual.region_config)

    logger.info(
        "Deal %s approved by %s: %d points, %s goals",
        deal.pk,
        getattr(approver, "pk", None),
        deal.points_earned,
        deal.goals_earned,
    )
    _notify_decision(deal, "deal_approved")
    return deal


@transaction.atomic
def reject_deal(deal_id) -> Deal:
    """Reject a deal. Any accrual left by an earlier approval is retracted."""
    deal = Deal.objects.select_for_update().get(pk=deal_id)

    retract_accrual(deal.pk)

    deal.status = Deal.Status.REJECTED
    deal.points_earned = 0
    deal.goals_earned = quantize_goals(0)
    deal.save(update_fields=["status", "points_earned", "goals_earned", "updated_at"])

    logger.info("Deal %s rejected", deal.pk)
    _notify_decision(deal, "deal_rejected")
    return deal


# ---------------------------------------------------------------------------
# delete_deal
# ---------------------------------------------------------------------------

@transaction.atomic
def delete_deal(deal_id, actor=None, ip: str | None = None) -> dict:
    """Delete a deal with its ledger entries and audit the pre-deletion snapshot.

    Returns the snapshot that was written to the audit log.
    """
    deal = Deal.objects.select_for_update().get(pk=deal_id)
    snapshot = deal.snapshot()

    retract_accrual(deal.pk)
    deal.delete()

    logger.info("Deal %s deleted by %s", deal_id, getattr(actor, "pk", None))
    record_audit_event(
        actor,
        "DEAL_DELETE",
        "Deal",
        deal_id,
        before=snapshot,
        after=None,
        ip=ip,
    )
    return snapshot
