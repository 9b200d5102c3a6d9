"""
Celery tasks for the projects app.

``close_expired_projects`` runs on the beat schedule and settles every
active project whose end date has passed: projects that reached their
goal become ``successful``, the rest ``failed``.
"""
from __future__ import annotations

import logging

from celery import shared_task
from django.db.models import F
from django.utils import timezone

from .models import Project

logger = logging.getLogger(__name__)


@shared_task
def close_expired_projects() -> dict:
    """Settle expired active projects and return the number moved to each status."""
    expired = Project.objects.filter(status=Project.STATUS_ACTIVE, end_date__lte=timezone.now())
    successful = expired.filter(raised__gte=F("goal")).update(status=Project.STATUS_SUCCESSFUL)
    failed = expired.filter(raised__lt=F("goal")).update(status=Project.STATUS_FAILED)
    if successful or failed:
        logger.info("Closed expired projects: %d successful, %d failed", successful, failed)
    return {"successful": successful, "failed": failed}
