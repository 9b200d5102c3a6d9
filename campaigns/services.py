"""
Review workflow for campaign requests.

``approve_campaign_request`` turns a pending request into a live
project (copying its reward tiers), renders the approval certificate
and marks the request approved.  ``reject_campaign_request`` records
the rejection.  Both lock the request row so a request is reviewed at
most once.
"""
from __future__ import annotations

import logging

from django.core.files.base import ContentFile
from django.db import transaction
from django.utils import timezone

from common.exceptions import InvalidStateError
from projects.models import Project, Reward
from .certificates import render_certificate
from .models import CampaignRequest

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_NOTE = "Campaign request did not meet our guidelines"


def _lock_pending(pk) -> CampaignRequest:
    campaign_request = CampaignRequest.objects.select_for_update().get(pk=pk)
    if not campaign_request.is_pending:
        raise InvalidStateError(f"Campaign request has already been {campaign_request.status}")
    return campaign_request


@transaction.atomic
def approve_campaign_request(campaign_request: CampaignRequest, reviewer, admin_notes: str = "") -> CampaignRequest:
    campaign_request = _lock_pending(campaign_request.pk)

    project = Project.objects.create(
        title=campaign_request.title,
        description=campaign_request.description,
        long_description=campaign_request.long_description,
        category=campaign_request.category,
        image=campaign_request.image,
        goal=campaign_request.goal,
        duration_days=campaign_request.duration_days,
        featured=campaign_request.featured,
        creator=campaign_request.creator,
        status=Project.STATUS_ACTIVE,
        verified=True,
    )
    Reward.objects.bulk_create([
        Reward(
            project=project,
            title=reward["title"],
            description=reward["description"],
            amount=reward["amount"],
            delivery=reward["delivery"],
        )
        for reward in campaign_request.rewards or []
    ])

    reviewed_at = timezone.now()
    campaign_request.status = CampaignRequest.STATUS_APPROVED
    campaign_request.admin_notes = admin_notes or ""
    campaign_request.reviewed_by = reviewer
    campaign_request.reviewed_at = reviewed_at
    campaign_request.project = project
    campaign_request.certificate.save(
        f"certificate_{campaign_request.pk}.pdf",
        ContentFile(render_certificate(campaign_request, reviewed_at)),
        save=False,
    )
    campaign_request.save()
    logger.info(
        "Campaign request %s approved by %s; created project %s",
        campaign_request.pk, reviewer.pk, project.pk,
    )
    return campaign_request


@transaction.atomic
def reject_campaign_request(campaign_request: CampaignRequest, reviewer, admin_notes: str = "") -> CampaignRequest:
    campaign_request = _lock_pending(campaign_request.pk)
    campaign_request.status = CampaignRequest.STATUS_REJECTED
    campaign_request.admin_notes = admin_notes or DEFAULT_REJECTION_NOTE
    campaign_request.reviewed_by = reviewer
    campaign_request.reviewed_at = timezone.now()
    campaign_request.save()
    logger.info("Campaign request %s rejected by %s", campaign_request.pk, reviewer.pk)
    return campaign_request
