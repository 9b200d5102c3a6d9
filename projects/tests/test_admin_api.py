"""
Tests for project management and platform stats under /api/admin/.
"""
from decimal import Decimal

import pytest
from django.utils import timezone

from payments.models import Payment
from projects.models import Project, Reward


@pytest.mark.django_db
def test_admin_endpoints_reject_regular_users(auth_client, project):
    assert auth_client.get("/api/admin/stats/").status_code == 403
    assert auth_client.get("/api/admin/projects/").status_code == 403
    assert auth_client.delete(f"/api/admin/projects/{project.id}/").status_code == 403


@pytest.mark.django_db
def test_admin_stats(admin_api_client, user, project):
    Payment.objects.create(user=user, project=project, amount=Decimal("700"), stripe_payment_id="pi_1")
    Payment.objects.create(
        user=user, project=project, amount=Decimal("300"), stripe_payment_id="pi_2", status=Payment.STATUS_FAILED
    )
    data = admin_api_client.get("/api/admin/stats/").json()
    assert data["total_projects"] == 1
    assert data["active_projects"] == 1
    assert data["total_users"] == 3  # user, project creator, admin
    assert data["total_payments"] == 2
    assert data["total_raised"] == 700.0


@pytest.mark.django_db
def test_admin_create_project_with_rewards(admin_api_client, platform_admin):
    payload = {
        "title": "Clean Rivers",
        "description": "Remove plastic from rivers.",
        "category": "Environment",
        "image": "https://cdn.example.com/river.jpg",
        "goal": 25000,
        "days_left": 45,
        "featured": True,
        "rewards": [
            {"title": "Sticker", "description": "A sticker", "amount": 100, "delivery": "May 2026"},
            {"title": "T-shirt", "description": "Organic cotton", "amount": 1500, "delivery": "July 2026"},
        ],
    }
    resp = admin_api_client.post("/api/admin/projects/", payload, content_type="application/json")
    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["days_left"] == 45
    assert body["creator"]["id"] == platform_admin.id
    assert [r["title"] for r in body["rewards"]] == ["Sticker", "T-shirt"]

    project = Project.objects.get(pk=body["id"])
    assert project.status == Project.STATUS_ACTIVE
    assert 44 <= (project.end_date - timezone.now()).days <= 45


@pytest.mark.django_db
def test_admin_create_validates_input(admin_api_client):
    resp = admin_api_client.post(
        "/api/admin/projects/", {"title": "No goal", "days_left": 0}, content_type="application/json"
    )
    assert resp.status_code == 400
    assert "goal" in resp.json()
    assert "days_left" in resp.json()


@pytest.mark.django_db
def test_admin_partial_update_syncs_rewards(admin_api_client, project):
    kept = project.rewards.get()
    dropped = Reward.objects.create(
        project=project, title="Poster", description="A poster", amount=Decimal("200"), delivery="Soon"
    )
    payload = {
        "title": "Solar Lamps for Every School",
        "rewards": [
            {"id": kept.id, "title": "Signed card", "description": kept.description, "amount": 600, "delivery": kept.delivery},
            {"title": "Lamp", "description": "Your own lamp", "amount": 3000, "delivery": "Aug 2026"},
        ],
    }
    resp = admin_api_client.put(f"/api/admin/projects/{project.id}/", payload, content_type="application/json")
    assert resp.status_code == 200, resp.content

    project.refresh_from_db()
    assert project.title == "Solar Lamps for Every School"
    assert project.description == "Bring solar lighting to rural classrooms."
    titles = sorted(project.rewards.values_list("title", flat=True))
    assert titles == ["Lamp", "Signed card"]
    assert not Reward.objects.filter(pk=dropped.pk).exists()
    kept.refresh_from_db()
    assert kept.amount == Decimal("600")


@pytest.mark.django_db
def test_admin_list_and_delete(admin_api_client, project):
    listing = admin_api_client.get("/api/admin/projects/").json()
    assert listing["results"][0]["creator"]["email"] == "u2@example.com"

    assert admin_api_client.delete(f"/api/admin/projects/{project.id}/").status_code == 204
    assert not Project.objects.filter(pk=project.id).exists()
