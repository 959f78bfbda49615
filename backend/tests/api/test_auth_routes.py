"""Auth Routes — signup, login and /me over the real token flow.

Tests cover:
    - signup: 201 with user + token, duplicate email 409, blank or missing input 400 with field details
    - login: success, wrong password and unknown email share one 401 message
    - me: valid token, missing token, malformed token, expired token
"""

from datetime import datetime, timedelta, timezone

from app.config import get_settings
from app.infrastructure.security import create_access_token


async def test_signup_returns_user_and_token(client):
    res = await client.post(
        "/api/auth/signup",
        json={"email": "  New.User@Example.com ", "password": "long-enough"},
    )

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully"
    assert body["data"]["user"]["email"] == "new.user@example.com"
    assert "password" not in body["data"]["user"]
    assert body["data"]["token"]


async def test_signup_duplicate_email_returns_409(client, signed_up):
    res = await client.post(
        "/api/auth/signup",
        json={"email": "PATIENT@example.com", "password": "another-pass"},
    )

    assert res.status_code == 409
    error = res.json()["error"]
    assert error["message"] == "User with this email already exists"
    assert error["code"] == "EMAIL_TAKEN"


async def test_signup_accepts_any_present_credentials(client):
    res = await client.post(
        "/api/auth/signup", json={"email": "a@b.co", "password": "abc"},
    )

    assert res.status_code == 201


async def test_signup_blank_email_is_validation_error(client):
    res = await client.post(
        "/api/auth/signup", json={"email": "   ", "password": "abc"},
    )

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["message"] == "Validation Failed"
    assert [d["field"] for d in error["details"]] == ["email"]


async def test_signup_missing_fields_reports_each(client):
    res = await client.post("/api/auth/signup", json={})

    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["error"]["details"]}
    assert fields == {"email", "password"}


async def test_login_success(client, signed_up):
    res = await client.post(
        "/api/auth/login",
        json={"email": "patient@example.com", "password": "correct-horse-1"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Login Successful"
    assert body["data"]["user"]["id"] == signed_up["user"]["id"]


async def test_login_wrong_password_and_unknown_email_look_the_same(
    client, signed_up,
):
    wrong = await client.post(
        "/api/auth/login",
        json={"email": "patient@example.com", "password": "nope-nope"},
    )
    unknown = await client.post(
        "/api/auth/login",
        json={"email": "ghost@example.com", "password": "correct-horse-1"},
    )

    assert wrong.status_code == unknown.status_code == 401
    assert (
        wrong.json()["error"]["message"]
        == unknown.json()["error"]["message"]
        == "Invalid email or password"
    )


async def test_me_returns_profile(client, signed_up):
    res = await client.get("/api/auth/me", headers=signed_up["headers"])

    assert res.status_code == 200
    user = res.json()["data"]["user"]
    assert user["email"] == "patient@example.com"
    assert "updatedAt" in user


async def test_me_without_token_is_401(client):
    res = await client.get("/api/auth/me")

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Access token is required"


async def test_me_with_garbage_token_is_401(client):
    res = await client.get(
        "/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid token"


async def test_me_with_expired_token_is_401(client, signed_up):
    issued = datetime.now(timezone.utc) - timedelta(days=30)
    token = create_access_token(
        signed_up["user"]["id"], get_settings(), now=issued,
    )

    res = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"},
    )

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Token has expired."


async def test_me_for_deleted_user_is_404(client):
    token = create_access_token(
        "00000000-0000-4000-8000-000000000000", get_settings(),
    )

    res = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"},
    )

    assert res.status_code == 404
    assert res.json()["error"]["message"] == "User not found"
