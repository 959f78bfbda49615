"""Auth Service — account creation, credential checks and profile lookup.

Invariants:
    - Unknown email and wrong password produce the same 401 message
    - Duplicate email -> 409, checked before hashing (and again by the unique index)
    - Returned dicts never contain the password hash
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.errors import (
    AuthenticationError, ConflictError, InvalidTokenError, ResourceNotFoundError,
)
from app.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from app.models import User

logger = logging.getLogger(__name__)


def public_user(user: User, include_updated: bool = False) -> dict:
    data = {
        "id": str(user.id),
        "email": user.email,
        "createdAt": user.created_at.isoformat(),
    }
    if include_updated:
        data["updatedAt"] = user.updated_at.isoformat()
    return data


async def _find_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def signup(
    db: AsyncSession, email: str, password: str, settings: Settings,
) -> dict:
    if await _find_by_email(db, email):
        raise ConflictError(
            "User with this email already exists", "EMAIL_TAKEN",
        )
    user = User(
        email=email,
        password=hash_password(password, settings.bcrypt_rounds),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup for the same address
        await db.rollback()
        raise ConflictError(
            "User with this email already exists", "EMAIL_TAKEN",
        )
    await db.refresh(user)
    logger.info("User created", extra={"user_id": str(user.id)})
    return {
        "user": public_user(user),
        "token": create_access_token(str(user.id), settings),
    }


async def login(
    db: AsyncSession, email: str, password: str, settings: Settings,
) -> dict:
    user = await _find_by_email(db, email)
    if not user or not verify_password(password, user.password):
        logger.warning("Login failed")
        raise AuthenticationError(
            "Invalid email or password", "INVALID_CREDENTIALS",
        )
    logger.info("User logged in", extra={"user_id": str(user.id)})
    return {
        "user": public_user(user),
        "token": create_access_token(str(user.id), settings),
    }


async def get_user(db: AsyncSession, user_id: str) -> User:
    try:
        key = uuid.UUID(user_id)
    except ValueError:
        raise InvalidTokenError()
    user = await db.get(User, key)
    if not user:
        raise ResourceNotFoundError("User")
    return user
