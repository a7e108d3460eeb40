"""Audit trail helpers shared by every app."""
from __future__ import annotations

import logging
from typing import Any

from django.db import transaction

from core.middleware import get_current_user
from core.models import AuditLog

logger = logging.getLogger("partnercup")


def create_audit_log(
    actor,
    action: str,
    entity_type: str,
    entity_id: str,
    before: dict[str, Any] | None = None,
    after: dict[str, Any] | None = None,
    ip: str | None = None,
) -> AuditLog:
    """Create and return a new :class:`~core.models.AuditLog` entry."""
    if actor is None:
        actor = get_current_user()
    return AuditLog.objects.create(
        actor=actor,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        before_json=before,
        after_json=after,
        ip_address=ip,
    )


def record_audit_event(
    actor,
    action: str,
    entity_type: str,
    entity_id: str,
    before: dict[str, Any] | None = None,
    after: dict[str, Any] | None = None,
    ip: str | None = None,
) -> None:
    """Write an audit entry once the current transaction commits.

    Audit storage is a side channel: a failure here is logged and never
    propagated to the business operation that triggered it.
    """

    def _write() -> None:
        try:
            create_audit_log(actor, action, entity_type, entity_id, before, after, ip)
        except Exception as exc:
            logger.warning(
                "audit log write failed for %s %s#%s: %s",
                action,
                entity_type,
                entity_id,
                exc,
                exc_info=True,
            )

    transaction.on_commit(_write)
