"""Assessment Service — image analysis flow: forward, validate, enrich, persist.

Invariants:
    - AI payload must have success=True and a well-formed prediction, else 500
    - Anonymous analyses are returned but never stored (assessment_id is None)
    - Authenticated analyses store the assessment and log the consent id in one commit
    - Status lookups only ever reveal the caller's own assessments

Design Decisions:
    - Flow functions take their collaborators as arguments: routes wire dependencies,
      tests pass fakes without patching
"""

import logging
import uuid
from dataclasses import dataclass

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import AssessmentStatus
from app.core.errors import AIServiceError, ResourceNotFoundError
from app.infrastructure.ai_client import AIServiceClient
from app.models import Assessment
from app.schemas.ai import AIAnalyzeResponse
from app.services.consent_service import record_consent
from app.services.education_service import EducationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    """An accepted image held in memory for the duration of one request."""
    content: bytes
    filename: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


def image_reference(consent_id: str, filename: str) -> str:
    return f"upload://{consent_id}/{filename}"


def assessment_to_dict(assessment: Assessment) -> dict:
    return {
        "id": str(assessment.id),
        "condition": assessment.condition,
        "confidence": assessment.confidence,
        "description": assessment.description,
        "urgency_level": assessment.urgency_level,
        "image_url": assessment.image_url,
        "timestamp": assessment.timestamp.isoformat(),
    }


def parse_ai_response(payload: dict) -> AIAnalyzeResponse:
    try:
        parsed = AIAnalyzeResponse.model_validate(payload)
    except ValidationError:
        raise AIServiceError(
            "Invalid response from AI service", 500, {"aiResponse": payload},
            code="AI_INVALID_RESPONSE",
        )
    if not parsed.success:
        raise AIServiceError(
            "Invalid response from AI service", 500, {"aiResponse": payload},
            code="AI_INVALID_RESPONSE",
        )
    return parsed


async def analyze_image(
    *,
    upload: ImageUpload,
    consent_id: str,
    ai_client: AIServiceClient,
    education: EducationService,
    db: AsyncSession | None = None,
    user_id: uuid.UUID | None = None,
) -> dict:
    """Run one analysis; persists only when both db and user_id are given."""
    logger.info(
        "Image analysis request received",
        extra={
            "consent_id": consent_id,
            "file_name": upload.filename,
            "file_size": upload.size,
            "mime_type": upload.content_type,
        },
    )
    payload = await ai_client.predict(
        upload.content, upload.filename, upload.content_type, consent_id,
    )
    response = parse_ai_response(payload)
    prediction = response.prediction

    enriched = education.enrich_prediction(
        prediction.condition, prediction.confidence,
    )
    result = enriched.to_dict()
    result["assessment_id"] = None

    if db is not None and user_id is not None:
        assessment = Assessment(
            user_id=user_id,
            image_url=image_reference(consent_id, upload.filename),
            condition=enriched.condition,
            confidence=enriched.confidence,
            description=enriched.description,
            urgency_level=enriched.urgency_level.value,
        )
        db.add(assessment)
        await record_consent(db, user_id, consent_id)
        await db.commit()
        result["assessment_id"] = str(assessment.id)

    logger.info(
        "Analysis completed successfully",
        extra={
            "consent_id": consent_id,
            "condition": enriched.condition,
            "confidence": enriched.confidence,
            "urgency_level": enriched.urgency_level.value,
            "chat_available": enriched.chat_available,
            "assessment_id": result["assessment_id"],
        },
    )
    return result


async def get_owned_assessment(
    db: AsyncSession, assessment_id: str, user_id: uuid.UUID,
) -> Assessment:
    try:
        key = uuid.UUID(assessment_id)
    except ValueError:
        raise ResourceNotFoundError("Assessment", assessment_id)
    result = await db.execute(
        select(Assessment).where(
            Assessment.id == key, Assessment.user_id == user_id,
        ),
    )
    assessment = result.scalar_one_or_none()
    if not assessment:
        raise ResourceNotFoundError("Assessment", assessment_id)
    return assessment


async def get_analysis_status(
    db: AsyncSession, assessment_id: str, user_id: uuid.UUID,
) -> dict:
    assessment = await get_owned_assessment(db, assessment_id, user_id)
    return {
        "status": AssessmentStatus.COMPLETED.value,
        "assessment": assessment_to_dict(assessment),
    }
