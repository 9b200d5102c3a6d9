"""
Thin wrapper around the Stripe SDK.

Every call configures the API key from settings first and translates
SDK errors into API exceptions: a missing secret key surfaces as
``PaymentsNotConfigured`` (503) and any ``stripe.StripeError`` as
``PaymentProviderError`` (502).  Stripe objects are returned as-is;
callers read them with item access (``obj["id"]``) so plain dicts work
as stand-ins.
"""
from __future__ import annotations

import logging

import stripe
from django.conf import settings

from common.exceptions import PaymentProviderError, PaymentsNotConfigured

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    return bool(getattr(settings, "STRIPE_SECRET_KEY", ""))


def get_stripe():
    """Return the ``stripe`` module with the secret key applied."""
    if not is_configured():
        raise PaymentsNotConfigured()
    stripe.api_key = settings.STRIPE_SECRET_KEY
    return stripe


def _call(description: str, func, **params):
    try:
        return func(**params)
    except stripe.StripeError as exc:
        logger.warning("Stripe %s failed: %s", description, getattr(exc, "user_message", None) or exc)
        raise PaymentProviderError(getattr(exc, "user_message", None) or str(exc)) from exc


def create_payment_intent(*, amount_minor: int, currency: str, metadata: dict):
    client = get_stripe()
    return _call(
        "PaymentIntent.create",
        client.PaymentIntent.create,
        amount=amount_minor,
        currency=currency,
        metadata=metadata,
        automatic_payment_methods={"enabled": True},
    )


def retrieve_payment_intent(payment_intent_id: str):
    client = get_stripe()
    return _call("PaymentIntent.retrieve", client.PaymentIntent.retrieve, id=payment_intent_id)


def create_checkout_session(**params):
    client = get_stripe()
    return _call("checkout.Session.create", client.checkout.Session.create, **params)


def retrieve_checkout_session(session_id: str):
    client = get_stripe()
    return _call("checkout.Session.retrieve", client.checkout.Session.retrieve, id=session_id)


def construct_webhook_event(payload: bytes, sig_header: str, secret: str):
    """Verify a webhook signature; raises ValueError or stripe.SignatureVerificationError."""
    return stripe.Webhook.construct_event(payload=payload, sig_header=sig_header, secret=secret)
