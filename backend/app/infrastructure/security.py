"""Credentials — bcrypt password hashing and HS256 bearer tokens.

Invariants:
    - Plain passwords never leave this module except as bcrypt hashes
    - Tokens carry {userId, exp, iat}; exp derived from JWT_EXPIRES_IN
    - decode_access_token raises TokenExpiredError / InvalidTokenError, never JWTError
"""

from datetime import datetime, timezone

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.config import Settings
from app.core.durations import parse_duration
from app.core.errors import InvalidTokenError, TokenExpiredError

_BCRYPT_MAX_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    # bcrypt only reads the first 72 bytes
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: int = 10) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(
    user_id: str, settings: Settings, now: datetime | None = None,
) -> str:
    issued = now or datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "iat": int(issued.timestamp()),
        "exp": int((issued + parse_duration(settings.jwt_expires_in)).timestamp()),
    }
    return jwt.encode(
        payload, settings.jwt_secret, algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str, settings: Settings) -> str:
    """Return the userId from a valid token."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()
    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError()
    return user_id
