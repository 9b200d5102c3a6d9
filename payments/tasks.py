"""
Celery tasks for the payments app.

These tasks decouple processing of Stripe webhook deliveries from the
request/response cycle.  When Stripe reports a completed Checkout
Session, ``process_checkout_session`` records the Payment (once per
session), updates the project counters and issues the receipt.
"""
from __future__ import annotations

import logging

from celery import shared_task

from projects.models import Project
from .services import CheckoutSessionError, record_checkout_session

logger = logging.getLogger(__name__)


@shared_task
def process_checkout_session(session: dict) -> int | None:
    """Record the payment for a completed Checkout Session.

    Args:
        session: The Checkout Session object from the webhook payload.

    Returns:
        The Payment id, or ``None`` when the session cannot be recorded.
    """
    try:
        result = record_checkout_session(session)
    except CheckoutSessionError as exc:
        logger.warning("Skipping checkout session %s: %s", session.get("id"), exc)
        return None
    except Project.DoesNotExist:
        logger.error("Checkout session %s references a missing project", session.get("id"))
        raise
    if not result.created:
        logger.info("Checkout session %s already recorded as payment %s", session.get("id"), result.payment.pk)
    return result.payment.pk
