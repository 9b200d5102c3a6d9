"""
Tests for authentication in the users app.

Covers registration, email + password login via JWT, the current-user
endpoint, logout (refresh token blacklisting) and the default admin
management command.
"""
import pytest
from django.contrib.auth.models import User
from django.core.management import call_command
from django.test import Client

from users.models import UserProfile


@pytest.mark.django_db
def test_register_and_login(client):
    """Ensure a new user can register and obtain a JWT token."""
    payload = {"name": "Alice A", "email": "Alice@Example.com", "password": "Str0ng!pass9"}
    response = client.post("/api/auth/register/", payload, content_type="application/json")
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["name"] == "Alice A"
    assert body["user"]["role"] == "user"
    assert body["access"] and body["refresh"]

    user = User.objects.get(email="alice@example.com")
    assert user.username == "alice@example.com"
    assert user.profile.role == UserProfile.ROLE_USER

    login_resp = client.post(
        "/api/auth/login/",
        {"email": "alice@example.com", "password": "Str0ng!pass9"},
        content_type="application/json",
    )
    assert login_resp.status_code == 200
    assert "access" in login_resp.json()
    assert login_resp.json()["user"]["name"] == "Alice A"


@pytest.mark.django_db
def test_register_rejects_duplicate_email_and_short_password(client, user):
    dup = client.post(
        "/api/auth/register/",
        {"name": "Again", "email": "U1@example.com", "password": "Str0ng!pass9"},
        content_type="application/json",
    )
    assert dup.status_code == 400
    assert "email" in dup.json()

    short = client.post(
        "/api/auth/register/",
        {"name": "Bob", "email": "bob@example.com", "password": "a1!"},
        content_type="application/json",
    )
    assert short.status_code == 400

    missing_name = client.post(
        "/api/auth/register/",
        {"email": "carol@example.com", "password": "Str0ng!pass9"},
        content_type="application/json",
    )
    assert missing_name.status_code == 400
    assert "name" in missing_name.json()


@pytest.mark.django_db
def test_login_with_bad_credentials(client, user):
    resp = client.post(
        "/api/auth/login/",
        {"email": user.email, "password": "wrong-password"},
        content_type="application/json",
    )
    assert resp.status_code == 401


@pytest.mark.django_db
def test_login_disabled_account(client, user):
    user.is_active = False
    user.save()
    resp = client.post(
        "/api/auth/login/",
        {"email": user.email, "password": "Str0ng!pass9"},
        content_type="application/json",
    )
    assert resp.status_code == 401


@pytest.mark.django_db
def test_me_endpoint(auth_client, user):
    response = auth_client.get("/api/auth/me/")
    assert response.status_code == 200
    assert response.json()["email"] == user.email
    assert response.json()["name"] == "User One"


@pytest.mark.django_db
def test_me_requires_authentication():
    assert Client().get("/api/auth/me/").status_code == 401


@pytest.mark.django_db
def test_logout_blacklists_refresh_token(client, user):
    tokens = client.post(
        "/api/auth/login/",
        {"email": user.email, "password": "Str0ng!pass9"},
        content_type="application/json",
    ).json()
    client.defaults["HTTP_AUTHORIZATION"] = f"Bearer {tokens['access']}"

    resp = client.post("/api/auth/logout/", {"refresh": tokens["refresh"]}, content_type="application/json")
    assert resp.status_code == 205

    refresh = client.post("/api/auth/token/refresh/", {"refresh": tokens["refresh"]}, content_type="application/json")
    assert refresh.status_code == 401

    missing = client.post("/api/auth/logout/", {}, content_type="application/json")
    assert missing.status_code == 400


@pytest.mark.django_db
def test_superuser_profile_gets_admin_role():
    admin = User.objects.create_superuser("root", "root@example.com", "Str0ng!pass9")
    assert admin.profile.role == UserProfile.ROLE_ADMIN


@pytest.mark.django_db
def test_create_default_admin_command(settings):
    settings.DEFAULT_ADMIN_EMAIL = "Boss@FundRise.com"
    settings.DEFAULT_ADMIN_PASSWORD = "Adm1n!secret"

    call_command("create_default_admin")
    admin = User.objects.get(email="boss@fundrise.com")
    assert admin.is_staff
    assert admin.profile.role == UserProfile.ROLE_ADMIN
    assert admin.check_password("Adm1n!secret")

    # Running it again is a no-op
    call_command("create_default_admin")
    assert User.objects.filter(email__iexact="boss@fundrise.com").count() == 1


def test_health_check_is_public():
    response = Client().get("/api/health/")
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "Server is running"}
