"""Tests for signup, login, password change and profile endpoints."""

import pytest
from httpx import AsyncClient

from conftest import PASSWORD, auth_headers
from storerate.core.security import decode_access_token

SIGNUP = {
    "name": "Alexandra Testington Rater",
    "email": "alex@example.com",
    "password": "Passw0rd!",
    "address": "42 Elm Street, Springfield",
}


@pytest.mark.asyncio
async def test_signup_creates_user_role(async_client: AsyncClient):
    resp = await async_client.post("/api/auth/signup", json=SIGNUP)
    assert resp.status_code == 201
    data = resp.json()
    assert data["user"]["email"] == "alex@example.com"
    assert data["user"]["role"] == "user"
    assert "password" not in data["user"]
    assert "hashed_password" not in data["user"]

    claims = decode_access_token(data["token"])
    assert claims.id == data["user"]["id"]
    assert claims.role == "user"


@pytest.mark.asyncio
async def test_signup_ignores_requested_role(async_client: AsyncClient):
    resp = await async_client.post("/api/auth/signup", json={**SIGNUP, "role": "admin"})
    assert resp.status_code == 201
    assert resp.json()["user"]["role"] == "user"


@pytest.mark.asyncio
async def test_signup_duplicate_email_rejected(async_client: AsyncClient):
    await async_client.post("/api/auth/signup", json=SIGNUP)
    resp = await async_client.post(
        "/api/auth/signup", json={**SIGNUP, "email": "ALEX@example.com"}
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field,value",
    [
        ("name", "Too Short"),
        ("name", "x" * 61),
        ("email", "not-an-email"),
        ("password", "alllowercase1!"),
        ("password", "NoSymbol123"),
        ("password", "Sh@1"),
        ("password", "Waytoolong@Password1"),
        ("address", "a" * 401),
    ],
)
async def test_signup_validation(async_client: AsyncClient, field, value):
    resp = await async_client.post("/api/auth/signup", json={**SIGNUP, field: value})
    assert resp.status_code == 400
    data = resp.json()
    assert data["success"] is False
    assert any(e["field"] == field for e in data["errors"])


@pytest.mark.asyncio
async def test_signup_then_login(async_client: AsyncClient):
    await async_client.post("/api/auth/signup", json=SIGNUP)
    resp = await async_client.post(
        "/api/auth/login", json={"email": SIGNUP["email"], "password": SIGNUP["password"]}
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["name"] == SIGNUP["name"]
    claims = decode_access_token(data["token"])
    assert claims.role == "user"
    assert claims.email == SIGNUP["email"]


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(async_client: AsyncClient, customer):
    wrong_password = await async_client.post(
        "/api/auth/login", json={"email": customer.email, "password": "Wrong@Pass1"}
    )
    unknown_email = await async_client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


@pytest.mark.asyncio
async def test_update_password(async_client: AsyncClient, customer):
    resp = await async_client.patch(
        "/api/auth/update-password",
        json={"oldPassword": PASSWORD, "newPassword": "Fresh#Pass9"},
        headers=auth_headers(customer),
    )
    assert resp.status_code == 200

    old_login = await async_client.post(
        "/api/auth/login", json={"email": customer.email, "password": PASSWORD}
    )
    new_login = await async_client.post(
        "/api/auth/login", json={"email": customer.email, "password": "Fresh#Pass9"}
    )
    assert old_login.status_code == 401
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_update_password_wrong_old(async_client: AsyncClient, owner):
    resp = await async_client.patch(
        "/api/auth/update-password",
        json={"oldPassword": "Wrong@Pass1", "newPassword": "Fresh#Pass9"},
        headers=auth_headers(owner),
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid old password"


@pytest.mark.asyncio
async def test_update_password_policy(async_client: AsyncClient, customer):
    resp = await async_client.patch(
        "/api/auth/update-password",
        json={"oldPassword": PASSWORD, "newPassword": "weak"},
        headers=auth_headers(customer),
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_password_requires_token(async_client: AsyncClient):
    resp = await async_client.patch(
        "/api/auth/update-password",
        json={"oldPassword": PASSWORD, "newPassword": "Fresh#Pass9"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_profile(async_client: AsyncClient, owner):
    resp = await async_client.get("/api/auth/me", headers=auth_headers(owner))
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == owner.email
    assert data["role"] == "owner"
    assert "hashed_password" not in data
