"""
Tests for the Checkout-Session flow and the Stripe webhook.
"""
import hashlib
import hmac
import json
import time
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.test import Client

from payments.models import Payment


def post_json(client, url, body):
    return client.post(url, body, content_type="application/json")


def webhook(payload, **extra):
    return Client().post("/api/webhook/stripe/", payload, content_type="application/json", **extra)


@pytest.mark.django_db
def test_create_session(auth_client, user, project, fake_stripe):
    resp = post_json(auth_client, "/api/checkout/create-session/", {"project_id": project.id, "amount": 750})
    assert resp.status_code == 200, resp.content
    assert resp.json() == {"session_id": "cs_test_1", "url": "https://checkout.stripe.test/cs_test_1"}

    _, params = fake_stripe.calls[0]
    assert params["mode"] == "payment"
    assert params["line_items"][0]["price_data"]["unit_amount"] == 75000
    assert params["line_items"][0]["price_data"]["product_data"]["name"] == f"Donation to: {project.title}"
    assert params["success_url"] == "http://localhost:5173/payment/success?session_id={CHECKOUT_SESSION_ID}"
    assert params["cancel_url"] == f"http://localhost:5173/project/{project.id}"
    assert params["client_reference_id"] == str(project.id)
    assert params["customer_email"] == user.email
    assert params["metadata"]["user_id"] == str(user.id)


@pytest.mark.django_db
def test_session_detail_is_public(project, fake_stripe):
    fake_stripe.add_session("cs_detail", 99900, project.id)
    resp = Client().get("/api/checkout/session/cs_detail/")
    assert resp.status_code == 200
    assert resp.json() == {
        "id": "cs_detail",
        "status": "paid",
        "customer_email": "donor@example.com",
        "amount_total": 999.0,
        "project_id": str(project.id),
    }
    assert Client().get("/api/checkout/session/cs_unknown/").status_code == 502


@pytest.mark.django_db
def test_confirm_payment_creates_guest_donor(project, fake_stripe):
    fake_stripe.add_session("cs_guest", 200000, project.id, email="Guest@Example.com", name="Kind Guest")
    resp = post_json(Client(), "/api/payment-confirm/confirm-payment/", {"session_id": "cs_guest"})
    assert resp.status_code == 200, resp.content
    body = resp.json()
    assert body["project_id"] == project.id
    assert body["new_raised_amount"] == 2000.0
    assert body["new_backers_count"] == 1
    assert body["receipt_download_url"].endswith(f"/api/payments/receipt/{body['payment_id']}/")

    donor = User.objects.get(email="guest@example.com")
    assert not donor.has_usable_password()
    assert donor.profile.full_name == "Kind Guest"
    assert Payment.objects.get().user == donor

    again = post_json(Client(), "/api/payment-confirm/confirm-payment/", {"session_id": "cs_guest"})
    assert again.json() == {"detail": "Payment already processed", "already_processed": True}


@pytest.mark.django_db
def test_confirm_payment_prefers_metadata_user(user, project, fake_stripe):
    reward = project.rewards.get()
    fake_stripe.add_session(
        "cs_member", 50000, project.id,
        metadata={"user_id": str(user.id), "reward_id": str(reward.id)},
    )
    resp = post_json(Client(), "/api/payment-confirm/confirm-payment/", {"session_id": "cs_member"})
    assert resp.status_code == 200
    payment = Payment.objects.get()
    assert payment.user == user
    assert payment.reward == reward
    assert not User.objects.filter(email="donor@example.com").exists()


@pytest.mark.django_db
def test_confirm_payment_errors(project, fake_stripe):
    url = "/api/payment-confirm/confirm-payment/"
    resp = post_json(Client(), url, {})
    assert resp.status_code == 400
    assert resp.json()["session_id"] == ["Session ID is required"]

    fake_stripe.add_session("cs_unpaid", 1000, project.id, payment_status="unpaid")
    resp = post_json(Client(), url, {"session_id": "cs_unpaid"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Payment not completed"

    fake_stripe.add_session("cs_noproject", 1000, None)
    resp = post_json(Client(), url, {"session_id": "cs_noproject"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No project ID found in session"

    fake_stripe.add_session("cs_gone", 1000, 999999)
    assert post_json(Client(), url, {"session_id": "cs_gone"}).status_code == 404
    assert Payment.objects.count() == 0


def session_event(session, event_type="checkout.session.completed"):
    return json.dumps({"id": "evt_1", "type": event_type, "data": {"object": session}})


@pytest.mark.django_db
def test_webhook_records_completed_session_once(project, fake_stripe):
    session = fake_stripe.add_session("cs_hook", 120000, project.id)
    assert webhook(session_event(session)).status_code == 200
    assert webhook(session_event(session)).status_code == 200

    payment = Payment.objects.get()
    assert payment.stripe_payment_id == "cs_hook"
    assert payment.amount == Decimal("1200.00")
    project.refresh_from_db()
    assert project.backers == 1

    # the success page arriving after the webhook sees the recorded payment
    resp = post_json(Client(), "/api/payment-confirm/confirm-payment/", {"session_id": "cs_hook"})
    assert resp.json()["already_processed"] is True


@pytest.mark.django_db
def test_webhook_marks_failed_intent(user, project):
    payment = Payment.objects.create(
        user=user, project=project, amount=Decimal("10"), stripe_payment_id="pi_fail", status=Payment.STATUS_PENDING,
    )
    resp = webhook(json.dumps({"type": "payment_intent.payment_failed", "data": {"object": {"id": "pi_fail"}}}))
    assert resp.status_code == 200
    assert resp.json() == {"received": True}
    payment.refresh_from_db()
    assert payment.status == Payment.STATUS_FAILED


@pytest.mark.django_db
def test_webhook_rejects_malformed_payload():
    assert webhook("not json").status_code == 400
    assert webhook(json.dumps({"data": {}})).status_code == 400


@pytest.mark.django_db
def test_webhook_signature(settings, project, fake_stripe):
    settings.STRIPE_WEBHOOK_SECRET = "whsec_test"
    payload = session_event(fake_stripe.add_session("cs_signed", 10000, project.id))

    assert webhook(payload, HTTP_STRIPE_SIGNATURE="t=1,v1=bad").status_code == 400
    assert Payment.objects.count() == 0

    timestamp = int(time.time())
    signature = hmac.new(b"whsec_test", f"{timestamp}.{payload}".encode(), hashlib.sha256).hexdigest()
    resp = webhook(payload, HTTP_STRIPE_SIGNATURE=f"t={timestamp},v1={signature}")
    assert resp.status_code == 200
    assert Payment.objects.filter(stripe_payment_id="cs_signed").exists()


@pytest.mark.django_db
def test_confirm_payment_reuses_account_holding_email_as_username(project, fake_stripe):
    holder = User.objects.create_user(username="donor@example.com", email="someone@else.com", password="x")
    fake_stripe.add_session("cs_taken", 30000, project.id)

    resp = post_json(Client(), "/api/payment-confirm/confirm-payment/", {"session_id": "cs_taken"})
    assert resp.status_code == 200, resp.content
    assert Payment.objects.get().user == holder
    assert User.objects.filter(username="donor@example.com").count() == 1
