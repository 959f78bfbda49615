"""Analyze Routes — image upload for prediction, and stored-analysis status.

Invariants:
    - Every field error (image, consentId) is reported in one 400
    - Upload type/size limits apply before the AI service is contacted
    - Bearer token optional on POST: present -> assessment persisted
"""

import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import optional_user_id, require_user_id
from app.api.uploads import read_image_upload
from app.config import Settings, get_settings
from app.core.errors import ValidationFailedError
from app.core.responses import success_response
from app.core.validation import validate_image_upload
from app.infrastructure.ai_client import AIServiceClient, get_ai_client
from app.infrastructure.database import get_db
from app.services import assessment_service
from app.services.education_service import EducationService, get_education_service

router = APIRouter(prefix="/api/analyze", tags=["analyze"])


@router.post("")
async def analyze_image(
    image: UploadFile | None = File(None),
    consent_id: str | None = Form(None, alias="consentId"),
    user_id: uuid.UUID | None = Depends(optional_user_id),
    settings: Settings = Depends(get_settings),
    ai_client: AIServiceClient = Depends(get_ai_client),
    education: EducationService = Depends(get_education_service),
    db: AsyncSession = Depends(get_db),
):
    errors = validate_image_upload(image is not None, consent_id)
    if errors:
        raise ValidationFailedError(errors)

    upload = await read_image_upload(image, settings)
    result = await assessment_service.analyze_image(
        upload=upload,
        consent_id=consent_id,
        ai_client=ai_client,
        education=education,
        db=db if user_id else None,
        user_id=user_id,
    )
    return success_response(result, "Image analysis completed successfully")


@router.get("/status/{assessment_id}")
async def analysis_status(
    assessment_id: str,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    data = await assessment_service.get_analysis_status(db, assessment_id, user_id)
    return success_response(data, "Status check endpoint")
