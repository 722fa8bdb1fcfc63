"""Tests for auth and health API endpoints."""
import pytest
from uuid import uuid4

from httpx import AsyncClient, ASGITransport

from inquiro.version import APP_VERSION


API_BASE_URL = "http://test"


def _register_payload(role: str = "RESPONDENT") -> dict:
    return {
        "email": f"api_{uuid4().hex[:8]}@example.com",
        "password": "SecurePass123",
        "name": "API User",
        "role": role,
    }


@pytest.mark.asyncio
async def test_health(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["database"] == "connected"
    assert body["data"]["version"] == APP_VERSION


@pytest.mark.asyncio
async def test_register_returns_tokens_and_user(test_app):
    """POST /auth/register creates the account and logs it in."""
    payload = _register_payload("CREATOR")

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        response = await client.post("/auth/register", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == payload["email"]
    assert data["user"]["role"] == "CREATOR"
    assert "password_hash" not in data["user"]


@pytest.mark.asyncio
async def test_register_duplicate_email(test_app):
    payload = _register_payload()

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        assert (await client.post("/auth/register", json=payload)).status_code == 201
        response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "data": None, "error": "email_taken", "message": None}


@pytest.mark.asyncio
async def test_register_validation_error_uses_envelope(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        response = await client.post("/auth/register", json={"email": "not-an-email", "password": "x"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Request validation failed"
    assert {error["field"] for error in body["errors"]} >= {"email", "password", "name"}


@pytest.mark.asyncio
async def test_login_and_me(test_app):
    payload = _register_payload()

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        await client.post("/auth/register", json=payload)
        login = await client.post(
            "/auth/login", json={"email": payload["email"], "password": payload["password"]}
        )
        assert login.status_code == 200
        token = login.json()["data"]["access_token"]

        me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 200
    assert me.json()["data"]["email"] == payload["email"]
    assert me.json()["data"]["last_login_date"] is not None


@pytest.mark.asyncio
async def test_login_wrong_password(test_app):
    payload = _register_payload()

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        await client.post("/auth/register", json=payload)
        response = await client.post(
            "/auth/login", json={"email": payload["email"], "password": "WrongPass123"}
        )

    assert response.status_code == 401
    assert response.json()["error"] == "Email/password combination is invalid"


@pytest.mark.asyncio
async def test_me_requires_token(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        missing = await client.get("/auth/me")
        malformed = await client.get("/auth/me", headers={"Authorization": "Token abc"})
        invalid = await client.get("/auth/me", headers={"Authorization": "Bearer abc"})

    assert missing.status_code == 401
    assert missing.json()["error"] == "Unauthorized"
    assert malformed.json()["error"] == "invalid_authorization_header"
    assert invalid.json()["error"] == "invalid_token"


@pytest.mark.asyncio
async def test_refresh_rotates_and_logout_revokes(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        registered = await client.post("/auth/register", json=_register_payload())
        refresh_token = registered.json()["data"]["refresh_token"]

        refreshed = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
        assert refreshed.status_code == 200
        new_refresh_token = refreshed.json()["data"]["refresh_token"]
        assert new_refresh_token != refresh_token

        reused = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
        assert reused.status_code == 401

        logout = await client.post("/auth/logout", json={"refresh_token": new_refresh_token})
        assert logout.status_code == 204

        after_logout = await client.post("/auth/refresh", json={"refresh_token": new_refresh_token})
        assert after_logout.status_code == 401


@pytest.mark.asyncio
async def test_refresh_without_token(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        response = await client.post("/auth/refresh", json={})

    assert response.status_code == 401
    assert response.json()["error"] == "missing_refresh_token"
