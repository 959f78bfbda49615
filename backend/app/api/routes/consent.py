"""Consent Routes — persist the consent the frontend collected."""

import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import require_user_id
from app.core.responses import success_response
from app.infrastructure.database import get_db
from app.schemas.consent import ConsentCreate
from app.services.consent_service import consent_to_dict, record_consent

router = APIRouter(prefix="/api/consent", tags=["consent"])


@router.post("")
async def create_consent(
    body: ConsentCreate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    """201 when recorded, 200 when this user already recorded the same consent id."""
    log, created = await record_consent(db, user_id, body.consent_id)
    if created:
        await db.commit()
        return JSONResponse(
            status_code=201,
            content=success_response(consent_to_dict(log), "Consent recorded"),
        )
    return success_response(consent_to_dict(log), "Consent already recorded")
