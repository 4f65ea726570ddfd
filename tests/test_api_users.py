"""HTTP tests for registration and login."""

import pytest

from app.core.config import settings


async def register(client, email="alice@example.com", password="s3cret-pass"):
    return await client.post(
        "/api/users",
        json={"name": " Alice ", "email": email, "password": password}
    )


@pytest.mark.asyncio
async def test_register_user(client):
    response = await register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Alice"
    assert body["email"] == "alice@example.com"
    assert "password" not in body
    assert "password_hash" not in body


@pytest.mark.asyncio
async def test_duplicate_email_is_conflict(client):
    await register(client)

    response = await register(client)

    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_short_password_is_rejected(client):
    response = await register(client, password="short")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_returns_token_and_cookie(client):
    user = (await register(client)).json()

    response = await client.post(
        "/api/users/login", json={"email": "alice@example.com", "password": "s3cret-pass"}
    )

    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"
    assert f"{settings.auth_cookie_name}={token}" in response.headers["set-cookie"]

    current = await client.get("/api/users/current", headers={"Authorization": f"Bearer {token}"})
    assert current.status_code == 200
    assert current.json()["id"] == user["id"]


@pytest.mark.asyncio
async def test_login_with_wrong_password(client):
    await register(client)

    response = await client.post(
        "/api/users/login", json={"email": "alice@example.com", "password": "wrong-pass"}
    )

    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "LOGIN_FAILED"


@pytest.mark.asyncio
async def test_login_with_unknown_email(client):
    response = await client.post(
        "/api/users/login", json={"email": "nobody@example.com", "password": "whatever1"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_current_user_requires_token(client):
    response = await client.get("/api/users/current")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_current_user_for_deleted_account(client, auth_headers):
    response = await client.get("/api/users/current", headers=auth_headers(9999))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_logout_clears_cookie(client):
    response = await client.post("/api/users/logout")

    assert response.status_code == 200
    assert f'{settings.auth_cookie_name}=""' in response.headers["set-cookie"]
