"""Auth Routes — signup, login, and the current-user profile."""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import require_user_id
from app.config import Settings, get_settings
from app.core.responses import success_response
from app.infrastructure.database import get_db
from app.schemas.auth import Credentials
from app.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: Credentials,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    data = await auth_service.signup(db, body.email, body.password, settings)
    return success_response(data, "User created successfully")


@router.post("/login")
async def login(
    body: Credentials,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    data = await auth_service.login(db, body.email, body.password, settings)
    return success_response(data, "Login Successful")


@router.get("/me")
async def me(
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await auth_service.get_user(db, str(user_id))
    return success_response(
        {"user": auth_service.public_user(user, include_updated=True)},
        "User retrieved successfully",
    )
