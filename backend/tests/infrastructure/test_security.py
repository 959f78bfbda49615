"""Credentials tests — bcrypt hashing and HS256 token round trips."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.config import Settings
from app.core.errors import InvalidTokenError, TokenExpiredError
from app.infrastructure.security import (
    create_access_token, decode_access_token, hash_password, verify_password,
)

USER_ID = "5f0c2b8e-8d0f-4c4e-9f37-0e6a2c1d9b11"


@pytest.fixture
def settings():
    return Settings(jwt_secret="unit-test-secret", jwt_expires_in="1h")


def test_hash_and_verify():
    hashed = hash_password("s3cret-pass", rounds=4)

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_verify_against_malformed_hash_is_false():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_carries_user_id_and_expiry(settings):
    issued = datetime.now(timezone.utc)
    token = create_access_token(USER_ID, settings, now=issued)

    claims = jwt.get_unverified_claims(token)
    assert claims["userId"] == USER_ID
    assert claims["exp"] - claims["iat"] == 3600
    assert decode_access_token(token, settings) == USER_ID


def test_expired_token(settings):
    token = create_access_token(
        USER_ID, settings, now=datetime.now(timezone.utc) - timedelta(hours=2),
    )

    with pytest.raises(TokenExpiredError):
        decode_access_token(token, settings)


def test_token_signed_with_other_secret(settings):
    token = create_access_token(
        USER_ID, Settings(jwt_secret="someone-elses-secret"),
    )

    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)


def test_token_without_user_id(settings):
    token = jwt.encode(
        {"sub": "x", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)
