"""Notification dispatch.

Callers fire and forget: delivery is queued after the surrounding
transaction commits and any failure is logged, never raised.
"""
from __future__ import annotations

import logging
from typing import Any

from django.db import transaction

logger = logging.getLogger("partnercup")

# kind -> (level, title, message template)
TEMPLATES = {
    "deal_approved": (
        "success",
        "Vente approuvee",
        "Votre vente {product_name} a ete approuvee : {points} points et {goals} buts.",
    ),
    "deal_rejected": (
        "warning",
        "Vente rejetee",
        "Votre vente {product_name} a ete rejetee.",
    ),
    "points_adjusted": (
        "info",
        "Points ajustes",
        "Vos points pour la vente {product_name} ont ete recalcules : {points} points.",
    ),
}


def render(kind: str, payload: dict[str, Any]) -> tuple[str, str, str]:
    """Return ``(level, title, message)`` for a notification kind."""
    level, title, template = TEMPLATES.get(kind, ("info", "Notification", "{message}"))
    try:
        message = template.format(**payload)
    except (KeyError, IndexError):
        message = payload.get("message", title)
    return level, title, message


def notify(user_id, kind: str, payload: dict[str, Any] | None = None) -> None:
    payload = dict(payload or {})

    def _dispatch() -> None:
        try:
            from notifications.tasks import deliver_notification

            deliver_notification.delay(user_id=str(user_id), kind=kind, payload=payload)
        except Exception as exc:
            logger.warning(
                "notification dispatch failed user=%s kind=%s: %s",
                user_id,
                kind,
                exc,
                exc_info=True,
            )

    try:
        transaction.on_commit(_dispatch)
    except Exception:
        _dispatch()


def mark_all_read(user) -> int:
    from notifications.models import Notification

    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
