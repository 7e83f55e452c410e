"""
Tests for authentication and registration: login, token checks, role forcing.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from app.core.security import create_access_token


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, test_user):
    """Valid credentials return a token plus the user's identity and role."""
    response = await client.post("/api/v1/auth/login", json={
        "username": "testuser",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == test_user.id
    assert data["user_role"] == "user"
    assert data["institution_id"] == test_user.institution_id
    assert data["token_type"] == "bearer"
    assert data["expires_in"] > 0
    assert data["access_token"]


@pytest.mark.asyncio
async def test_login_token_is_accepted(client: AsyncClient, test_user):
    """A token from login authenticates later requests."""
    login = await client.post("/api/v1/auth/login", json={
        "username": "testuser",
        "password": "testpassword123",
    })
    token = login.json()["access_token"]

    response = await client.get(
        f"/api/v1/users/{test_user.id}",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 200
    assert response.json()["id"] == test_user.id


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_user):
    """Wrong password returns 401."""
    response = await client.post("/api/v1/auth/login", json={
        "username": "testuser",
        "password": "wrongpassword",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_unknown_user(client: AsyncClient):
    """Unknown username returns 401, same as a bad password."""
    response = await client.post("/api/v1/auth/login", json={
        "username": "nobody",
        "password": "whatever123",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_blank_credentials(client: AsyncClient, test_user):
    response = await client.post("/api/v1/auth/login", json={"username": "  ", "password": ""})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_token_rejected(client: AsyncClient, test_user):
    response = await client.get(f"/api/v1/users/{test_user.id}")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_rejected(client: AsyncClient, test_user):
    response = await client.get(
        f"/api/v1/users/{test_user.id}",
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_rejected(client: AsyncClient, test_user):
    token = create_access_token(
        data={"sub": test_user.id, "role": "user"},
        expires_delta=timedelta(minutes=-5),
    )
    response = await client.get(
        f"/api/v1/users/{test_user.id}",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    """Open registration creates a user and never exposes the password hash."""
    response = await client.post("/api/v1/users/", json={
        "name": "New Person",
        "email": "new@example.com",
        "username": "newuser",
        "password": "securepassword123",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["role"] == "user"
    assert "hashed_password" not in data
    assert "password" not in data


@pytest.mark.asyncio
async def test_register_cannot_self_grant_admin(client: AsyncClient):
    """Anonymous registration asking for admin is downgraded to user."""
    response = await client.post("/api/v1/users/", json={
        "username": "sneaky",
        "password": "securepassword123",
        "role": "admin",
    })
    assert response.status_code == 201
    assert response.json()["role"] == "user"


@pytest.mark.asyncio
async def test_admin_can_create_admin(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/users/",
        json={"username": "second_admin", "password": "securepassword123", "role": "admin"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, test_user):
    """Duplicate username returns 409."""
    response = await client.post("/api/v1/users/", json={
        "username": "testuser",
        "password": "securepassword123",
    })
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_weak_password(client: AsyncClient):
    """Password under 8 chars returns 422."""
    response = await client.post("/api/v1/users/", json={
        "username": "weakuser",
        "password": "short",
    })
    assert response.status_code == 422
