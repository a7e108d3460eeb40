"""Celery tasks for notification delivery."""
import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name="notifications.deliver_notification")
def deliver_notification(*, user_id: str, kind: str, payload: dict):
    """Persist an in-app notification for ``user_id``."""
    from notifications.models import Notification
    from notifications.services import render

    level, title, message = render(kind, payload)
    notification = Notification.objects.create(
        user_id=user_id,
        kind=kind if kind in Notification.Kind.values else Notification.Kind.INFO,
        level=level,
        title=title,
        message=message,
        payload=payload,
    )
    logger.info("Notification %s delivered to user=%s", kind, user_id)
    return notification.pk
