"""Celery tasks for the deals module."""
from __future__ import annotations

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name="deals.recalculate_points")
def recalculate_points():
    """Run the points recalculation job out of request."""
    from deals.recalculation import recalculate_all_deal_points

    return recalculate_all_deal_points().as_dict()


@shared_task(name="deals.recalculate_goals")
def recalculate_goals():
    """Run the goals recalculation job out of request."""
    from deals.recalculation import recalculate_all_deal_goals

    return recalculate_all_deal_goals().as_dict()
