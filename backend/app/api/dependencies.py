"""Request Dependencies — bearer-token resolution for protected and optional-auth routes.

Invariants:
    - require_user_id: missing token -> 401 "Access token is required"
    - optional_user_id: missing token -> None; a present but bad token is still a 401
    - Only the "Bearer" scheme is accepted
"""

import uuid

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, get_settings
from app.core.errors import AuthenticationError, InvalidTokenError
from app.infrastructure.security import decode_access_token

_bearer = HTTPBearer(auto_error=False)


def _resolve(
    credentials: HTTPAuthorizationCredentials | None, settings: Settings,
) -> uuid.UUID | None:
    if credentials is None or not credentials.credentials:
        return None
    user_id = decode_access_token(credentials.credentials, settings)
    try:
        return uuid.UUID(user_id)
    except ValueError:
        raise InvalidTokenError()


async def optional_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> uuid.UUID | None:
    return _resolve(credentials, settings)


async def require_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> uuid.UUID:
    user_id = _resolve(credentials, settings)
    if user_id is None:
        raise AuthenticationError("Access token is required", "TOKEN_REQUIRED")
    return user_id
