"""
Common test fixtures for the Django REST Framework API tests.

Provides users (a regular user, a second user and a platform admin),
Django test clients authenticated with JWT tokens, a live project with
a reward tier, a temporary media root so generated PDFs and uploads
never touch the working tree, and a fake Stripe that replaces the SDK
calls the payment views make.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
import stripe
from django.contrib.auth.models import User
from django.test import Client
from django.utils import timezone

from projects.models import Project, Reward
from users.models import UserProfile

PASSWORD = "Str0ng!pass9"


def make_user(email, name, role=UserProfile.ROLE_USER, password=PASSWORD):
    user = User.objects.create_user(username=email, email=email, password=password)
    profile = user.profile
    profile.full_name = name
    profile.role = role
    profile.save()
    return user


def login(client, email, password=PASSWORD):
    """Authenticate the Django test client using JWT tokens."""
    resp = client.post(
        "/api/auth/login/",
        {"email": email, "password": password},
        content_type="application/json",
    )
    assert resp.status_code == 200, resp.content
    client.defaults["HTTP_AUTHORIZATION"] = f"Bearer {resp.json()['access']}"
    return client


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


@pytest.fixture
def user(db):
    """Create a test user."""
    return make_user("u1@example.com", "User One")


@pytest.fixture
def other_user(db):
    return make_user("u2@example.com", "User Two")


@pytest.fixture
def platform_admin(db):
    return make_user("admin@example.com", "Site Admin", role=UserProfile.ROLE_ADMIN)


@pytest.fixture
def auth_client(client, user):
    return login(client, user.email)


@pytest.fixture
def other_client(other_user):
    return login(Client(), other_user.email)


@pytest.fixture
def admin_api_client(platform_admin):
    return login(Client(), platform_admin.email)


@pytest.fixture
def project(db, other_user):
    """An active project created by ``other_user`` with one reward tier."""
    project = Project.objects.create(
        title="Solar Lamps for Schools",
        description="Bring solar lighting to rural classrooms.",
        long_description="Every lamp lights a classroom for five years.",
        category="Technology",
        image="https://cdn.example.com/lamps.jpg",
        goal=Decimal("50000"),
        duration_days=30,
        creator=other_user,
    )
    Reward.objects.create(
        project=project,
        title="Thank-you card",
        description="A handwritten card from the students.",
        amount=Decimal("500"),
        delivery="June 2026",
    )
    return project


@pytest.fixture
def expired_project(db, other_user):
    project = Project.objects.create(
        title="Community Garden",
        description="Raised beds for the neighbourhood.",
        category="Community",
        image="https://cdn.example.com/garden.jpg",
        goal=Decimal("1000"),
        duration_days=10,
        creator=other_user,
    )
    Project.objects.filter(pk=project.pk).update(end_date=timezone.now() - timedelta(hours=1))
    project.refresh_from_db()
    return project


class FakeStripe:
    """In-memory stand-in for the PaymentIntent and Checkout Session APIs."""

    def __init__(self):
        self.intents = {}
        self.sessions = {}
        self.calls = []

    def add_intent(self, intent_id, amount_minor, status="succeeded", metadata=None, currency="inr"):
        self.intents[intent_id] = {
            "id": intent_id,
            "object": "payment_intent",
            "amount": amount_minor,
            "amount_received": amount_minor if status == "succeeded" else 0,
            "currency": currency,
            "status": status,
            "client_secret": f"{intent_id}_secret",
            "metadata": metadata or {},
        }
        return self.intents[intent_id]

    def add_session(self, session_id, amount_minor, project_id, payment_status="paid",
                    email="donor@example.com", name="Generous Donor", metadata=None):
        self.sessions[session_id] = {
            "id": session_id,
            "object": "checkout.session",
            "payment_status": payment_status,
            "amount_total": amount_minor,
            "currency": "inr",
            "client_reference_id": str(project_id) if project_id is not None else None,
            "customer_details": {"email": email, "name": name},
            "metadata": metadata or {},
            "url": f"https://checkout.stripe.test/{session_id}",
        }
        return self.sessions[session_id]

    def create_intent(self, **params):
        self.calls.append(("PaymentIntent.create", params))
        intent_id = f"pi_test_{len(self.intents) + 1}"
        return self.add_intent(intent_id, params["amount"], status="requires_payment_method",
                               metadata=params.get("metadata"), currency=params["currency"])

    def retrieve_intent(self, id, **params):
        self.calls.append(("PaymentIntent.retrieve", {"id": id}))
        if id not in self.intents:
            raise stripe.InvalidRequestError(f"No such payment_intent: '{id}'", "id")
        return self.intents[id]

    def create_session(self, **params):
        self.calls.append(("checkout.Session.create", params))
        session_id = f"cs_test_{len(self.sessions) + 1}"
        session = self.add_session(
            session_id,
            params["line_items"][0]["price_data"]["unit_amount"],
            params.get("client_reference_id"),
            payment_status="unpaid",
            metadata=params.get("metadata"),
        )
        return session

    def retrieve_session(self, id, **params):
        self.calls.append(("checkout.Session.retrieve", {"id": id}))
        if id not in self.sessions:
            raise stripe.InvalidRequestError(f"No such checkout.session: '{id}'", "id")
        return self.sessions[id]


@pytest.fixture
def fake_stripe(monkeypatch):
    fake = FakeStripe()
    monkeypatch.setattr(stripe.PaymentIntent, "create", fake.create_intent)
    monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake.retrieve_intent)
    monkeypatch.setattr(stripe.checkout.Session, "create", fake.create_session)
    monkeypatch.setattr(stripe.checkout.Session, "retrieve", fake.retrieve_session)
    return fake
