"""
Tests for the campaign request workflow: submission, visibility,
approval into a live project (with certificate), rejection and
deletion rules.
"""
from decimal import Decimal

import pytest
from django.test import Client

from campaigns.models import CampaignRequest
from projects.models import Project

SUBMISSION = {
    "title": "Braille Library",
    "description": "Braille books for the city library.",
    "long_description": "We will print and bind 300 titles.",
    "category": "Education",
    "image": "https://cdn.example.com/braille.jpg",
    "goal": 80000,
    "days_left": 40,
    "featured": True,
    "rewards": [
        {"title": "Bookmark", "description": "Braille bookmark", "amount": 250, "delivery": "Sep 2026"},
        {"title": "Dedication", "description": "Your name in a book", "amount": 5000, "delivery": "Dec 2026"},
    ],
}


@pytest.fixture
def pending_request(auth_client):
    resp = auth_client.post("/api/campaign-requests/", SUBMISSION, content_type="application/json")
    assert resp.status_code == 201, resp.content
    return CampaignRequest.objects.get(pk=resp.json()["campaign_request"]["id"])


@pytest.mark.django_db
def test_submit_forces_pending(auth_client, user):
    resp = auth_client.post(
        "/api/campaign-requests/", {**SUBMISSION, "status": "approved"}, content_type="application/json"
    )
    assert resp.status_code == 201
    body = resp.json()
    assert "will be reviewed" in body["detail"]
    assert body["campaign_request"]["status"] == "pending"
    assert body["campaign_request"]["rewards"][1]["amount"] == 5000.0

    campaign_request = CampaignRequest.objects.get()
    assert campaign_request.creator == user
    assert campaign_request.duration_days == 40
    assert campaign_request.rewards[0] == {
        "title": "Bookmark", "description": "Braille bookmark", "amount": "250.00", "delivery": "Sep 2026",
    }


@pytest.mark.django_db
def test_submit_requires_auth_and_valid_body(auth_client):
    assert Client().post("/api/campaign-requests/", SUBMISSION, content_type="application/json").status_code == 401
    resp = auth_client.post("/api/campaign-requests/", {"title": "Only a title"}, content_type="application/json")
    assert resp.status_code == 400
    assert "goal" in resp.json()


@pytest.mark.django_db
def test_visibility(auth_client, other_client, admin_api_client, pending_request):
    mine = auth_client.get("/api/campaign-requests/my-requests/").json()
    assert [r["id"] for r in mine] == [pending_request.id]
    assert other_client.get("/api/campaign-requests/my-requests/").json() == []

    assert auth_client.get(f"/api/campaign-requests/{pending_request.id}/").status_code == 200
    assert other_client.get(f"/api/campaign-requests/{pending_request.id}/").status_code == 403
    assert admin_api_client.get(f"/api/campaign-requests/{pending_request.id}/").status_code == 200

    assert auth_client.get("/api/campaign-requests/").status_code == 403
    listing = admin_api_client.get("/api/campaign-requests/?status=pending").json()
    assert listing["count"] == 1
    assert admin_api_client.get("/api/campaign-requests/?status=approved").json()["count"] == 0


@pytest.mark.django_db
def test_approve_creates_project_and_certificate(admin_api_client, auth_client, platform_admin, user, pending_request):
    resp = admin_api_client.put(
        f"/api/campaign-requests/{pending_request.id}/approve/",
        {"admin_notes": "Looks great"},
        content_type="application/json",
    )
    assert resp.status_code == 200, resp.content
    body = resp.json()
    assert body["campaign_request"]["status"] == "approved"
    assert body["campaign_request"]["reviewed_by"]["id"] == platform_admin.id
    assert body["certificate_url"]
    assert body["certificate_download_url"].endswith(f"/api/campaign-requests/certificate/{pending_request.id}/")

    project = Project.objects.get(pk=body["project"]["id"])
    assert project.creator == user
    assert project.status == Project.STATUS_ACTIVE
    assert project.featured is True
    assert project.days_left == 40
    assert sorted(project.rewards.values_list("title", flat=True)) == ["Bookmark", "Dedication"]

    pending_request.refresh_from_db()
    assert pending_request.project == project
    assert pending_request.admin_notes == "Looks great"
    assert pending_request.reviewed_at is not None

    download = auth_client.get(f"/api/campaign-requests/certificate/{pending_request.id}/")
    assert download.status_code == 200
    assert download["Content-Type"] == "application/pdf"
    assert "FundRise_Certificate_User_One.pdf" in download["Content-Disposition"]
    assert b"".join(download.streaming_content).startswith(b"%PDF")

    again = admin_api_client.post(f"/api/campaign-requests/{pending_request.id}/approve/", {}, content_type="application/json")
    assert again.status_code == 400
    assert Project.objects.count() == 1


@pytest.mark.django_db
def test_reject_uses_default_note(admin_api_client, auth_client, pending_request):
    resp = admin_api_client.post(f"/api/campaign-requests/{pending_request.id}/reject/", {}, content_type="application/json")
    assert resp.status_code == 200
    assert resp.json()["campaign_request"]["admin_notes"] == "Campaign request did not meet our guidelines"
    assert Project.objects.count() == 0

    cert = auth_client.get(f"/api/campaign-requests/certificate/{pending_request.id}/")
    assert cert.status_code == 400

    again = admin_api_client.post(f"/api/campaign-requests/{pending_request.id}/reject/", {}, content_type="application/json")
    assert again.status_code == 400


@pytest.mark.django_db
def test_review_requires_admin(auth_client, pending_request):
    resp = auth_client.put(f"/api/campaign-requests/{pending_request.id}/approve/", {}, content_type="application/json")
    assert resp.status_code == 403
    pending_request.refresh_from_db()
    assert pending_request.is_pending


@pytest.mark.django_db
def test_certificate_download_permissions(admin_api_client, other_client, pending_request):
    admin_api_client.post(f"/api/campaign-requests/{pending_request.id}/approve/", {}, content_type="application/json")
    assert other_client.get(f"/api/campaign-requests/certificate/{pending_request.id}/").status_code == 403
    assert admin_api_client.get(f"/api/campaign-requests/certificate/{pending_request.id}/").status_code == 200
    assert admin_api_client.get("/api/campaign-requests/certificate/999999/").status_code == 404


@pytest.mark.django_db
def test_delete_rules(auth_client, other_client, admin_api_client, user, pending_request):
    assert other_client.delete(f"/api/campaign-requests/{pending_request.id}/").status_code == 403
    assert auth_client.delete(f"/api/campaign-requests/{pending_request.id}/").status_code == 204

    reviewed = CampaignRequest.objects.create(
        title="Reviewed", description="d", category="Art", image="https://cdn.example.com/r.jpg",
        goal=Decimal("10"), duration_days=3, creator=user, status=CampaignRequest.STATUS_REJECTED,
    )
    assert auth_client.delete(f"/api/campaign-requests/{reviewed.id}/").status_code == 400
    assert admin_api_client.delete(f"/api/campaign-requests/{reviewed.id}/").status_code == 204
