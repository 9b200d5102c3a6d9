"""
Payment recording.

Both Stripe flows end in ``record_payment``: it inserts the Payment,
bumps the project's ``raised``/``backers`` counters (and the reward's
``backers``), posts a "New Donation Received" update and issues the
receipt.  The insert and the counter updates share one transaction
with the project row locked, and ``stripe_payment_id`` is unique, so a
Stripe payment delivered twice (confirm endpoint plus webhook) is
recorded once.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import F

from common.currency import format_inr, from_minor_units, to_decimal
from projects.models import Project, ProjectUpdate, Reward
from users.models import UserProfile, display_name
from .models import Payment
from .receipts import issue_receipt

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass
class RecordedPayment:
    payment: Payment
    created: bool


def _parse_id(value):
    if value in (None, "", "none", "null"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def record_payment(
    *,
    user,
    project_id,
    stripe_payment_id: str,
    amount,
    currency: str,
    reward_id=None,
    donor_name: str | None = None,
) -> RecordedPayment:
    """
    Record a completed Stripe payment exactly once.

    Raises ``Project.DoesNotExist`` when the project is gone.  A reward id
    that does not belong to the project is ignored.
    """
    existing = Payment.objects.filter(stripe_payment_id=stripe_payment_id).first()
    if existing is not None:
        return RecordedPayment(existing, False)

    amount = to_decimal(amount)
    reward_id = _parse_id(reward_id)
    try:
        with transaction.atomic():
            project = Project.objects.select_for_update().get(pk=project_id)
            reward = None
            if reward_id is not None:
                reward = Reward.objects.filter(pk=reward_id, project=project).first()

            payment = Payment.objects.create(
                user=user,
                project=project,
                reward=reward,
                amount=amount,
                currency=currency,
                stripe_payment_id=stripe_payment_id,
                status=Payment.STATUS_COMPLETED,
            )
            Project.objects.filter(pk=project.pk).update(
                raised=F("raised") + amount,
                backers=F("backers") + 1,
            )
            if reward is not None:
                Reward.objects.filter(pk=reward.pk).update(backers=F("backers") + 1)

            name = donor_name or display_name(user)
            ProjectUpdate.objects.create(
                project=project,
                title="New Donation Received",
                content=f"{name} has donated ₹{format_inr(amount)} to this project. Thank you for your support!",
                type=ProjectUpdate.TYPE_ANNOUNCEMENT,
            )
    except IntegrityError:
        # Lost the race against a concurrent delivery of the same Stripe payment
        payment = Payment.objects.filter(stripe_payment_id=stripe_payment_id).first()
        if payment is None:
            raise
        return RecordedPayment(payment, False)

    logger.info(
        "Recorded payment %s: %s %s to project %s by user %s",
        payment.pk, amount, currency, project_id, user.pk,
    )
    try:
        issue_receipt(payment)
    except OSError:
        logger.exception("Receipt generation failed for payment %s", payment.pk)
    return RecordedPayment(payment, True)


def resolve_checkout_donor(session):
    """
    Find the user who paid for a Checkout Session.

    Prefers the ``user_id`` stored in the session metadata; otherwise
    finds or creates a user for the customer email.  Returns ``None``
    when neither is available.
    """
    metadata = session.get("metadata") or {}
    user_id = _parse_id(metadata.get("user_id"))
    if user_id is not None:
        user = User.objects.filter(pk=user_id).first()
        if user is not None:
            return user

    details = session.get("customer_details") or {}
    email = (details.get("email") or session.get("customer_email") or "").strip().lower()
    if not email:
        return None

    user = User.objects.filter(email__iexact=email).order_by("id").first()
    if user is not None:
        return user

    try:
        with transaction.atomic():
            user = User(username=email, email=email)
            user.set_unusable_password()
            user.save()
    except IntegrityError:
        # Created by a concurrent delivery, or the address is already some account's username
        user = User.objects.filter(username=email).first()
        if user is None:
            raise
        return user
    profile = user.profile
    profile.full_name = details.get("name") or "Anonymous Donor"
    profile.role = UserProfile.ROLE_USER
    profile.save(update_fields=["full_name", "role", "updated_at"])
    logger.info("Created guest donor %s for checkout session %s", user.pk, session.get("id"))
    return user


class CheckoutSessionError(ValueError):
    """A Checkout Session that cannot be turned into a Payment."""


def record_checkout_session(session) -> RecordedPayment:
    """Record the Payment for a paid Checkout Session (confirm endpoint and webhook)."""
    session_id = session.get("id")
    existing = Payment.objects.filter(stripe_payment_id=session_id).first()
    if existing is not None:
        return RecordedPayment(existing, False)

    if session.get("payment_status") != "paid":
        raise CheckoutSessionError("Payment not completed")

    metadata = session.get("metadata") or {}
    project_id = _parse_id(session.get("client_reference_id")) or _parse_id(metadata.get("project_id"))
    if project_id is None:
        raise CheckoutSessionError("No project ID found in session")

    user = resolve_checkout_donor(session)
    if user is None:
        raise CheckoutSessionError("Unable to identify the donor for this session")

    details = session.get("customer_details") or {}
    return record_payment(
        user=user,
        project_id=project_id,
        stripe_payment_id=session_id,
        amount=from_minor_units(session.get("amount_total")),
        currency=(session.get("currency") or "inr").lower(),
        reward_id=metadata.get("reward_id"),
        donor_name=details.get("name") or None,
    )
