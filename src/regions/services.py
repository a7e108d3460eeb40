"""Write-side helpers for rate configuration."""
from __future__ import annotations

import logging

from django.db import transaction
from django.forms.models import model_to_dict

from core.services import record_audit_event
from regions.models import PointsConfig

logger = logging.getLogger("partnercup")

POINTS_RATE_FIELDS = ("new_customer_rate", "renewal_rate", "grand_prize_threshold")


@transaction.atomic
def update_points_config(region: str, actor=None, ip: str | None = None, **rates) -> PointsConfig:
    """Create or update the active point rates for ``region``.

    Already-written ledger entries are untouched; run the points
    recalculation job to apply the new rates retroactively.
    """
    unknown = set(rates) - set(POINTS_RATE_FIELDS)
    if unknown:
        raise ValueError(f"Champs inconnus : {', '.join(sorted(unknown))}.")
    for field in ("new_customer_rate", "renewal_rate"):
        if field in rates and (rates[field] is None or int(rates[field]) <= 0):
            raise ValueError("Les baremes de points doivent etre strictement positifs.")

    config = (
        PointsConfig.objects
        .select_for_update()
        .filter(region=region, is_active=True)
        .first()
    )
    before = model_to_dict(config, fields=POINTS_RATE_FIELDS) if config else None
    if config is None:
        config = PointsConfig(region=region)
    for field, value in rates.items():
        setattr(config, field, value)
    config.updated_by = actor
    config.save()

    logger.info("Points config updated for region=%s: %s", region, rates)
    record_audit_event(
        actor,
        "POINTS_CONFIG_UPDATE",
        "PointsConfig",
        config.pk,
        before=before,
        after=model_to_dict(config, fields=POINTS_RATE_FIELDS),
        ip=ip,
    )
    return config
