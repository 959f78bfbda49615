"""Chat Service — answers questions about a diagnosed condition.

Invariants:
    - Conditions with chat disabled -> 403 before any upstream call
    - RAG disabled: deterministic demo answer, isDemoResponse=True
    - RAG enabled: upstream must return success=True and a non-empty answer, else 500
    - History is stored only for an authenticated caller who owns the assessment

Design Decisions:
    - Demo answering stays as the default: the RAG service is optional infrastructure
"""

import logging
import uuid

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AIServiceError, ChatUnavailableError
from app.infrastructure.ai_client import AIServiceClient
from app.models import Assessment, ChatMessage
from app.schemas.ai import AIChatResponse
from app.services.assessment_service import get_owned_assessment
from app.services.education_service import EducationService

logger = logging.getLogger(__name__)

DEMO_NOTE = "This is demo response. Real RAG integration is in process."


def chat_message_to_dict(message: ChatMessage) -> dict:
    return {
        "id": str(message.id),
        "assessmentId": str(message.assessment_id),
        "question": message.question,
        "answer": message.answer,
        "timestamp": message.timestamp.isoformat(),
    }


async def _rag_answer(
    ai_client: AIServiceClient,
    disease: str,
    question: str,
    consent_id: str | None,
) -> dict:
    payload = await ai_client.chat(disease, question, consent_id)
    try:
        parsed = AIChatResponse.model_validate(payload)
    except ValidationError:
        parsed = None
    if parsed is None or not parsed.success:
        raise AIServiceError(
            "Invalid response from RAG server", 500, {"ragResponse": payload},
            code="AI_INVALID_RESPONSE",
        )
    return {
        "question": question,
        "answer": parsed.answer,
        "disease": disease,
        "sources": parsed.sources,
        "context": parsed.context,
        "isDemoResponse": False,
    }


async def answer_question(
    *,
    disease: str,
    question: str,
    consent_id: str | None,
    education: EducationService,
    ai_client: AIServiceClient,
    rag_enabled: bool,
    db: AsyncSession | None = None,
    user_id: uuid.UUID | None = None,
    assessment_id: str | None = None,
) -> dict:
    logger.info(
        "Chat request received",
        extra={"disease": disease, "consent_id": consent_id},
    )
    if not education.is_chat_enabled(disease):
        raise ChatUnavailableError(disease)

    # Resolve ownership before spending an upstream call
    assessment: Assessment | None = None
    if assessment_id and db is not None and user_id is not None:
        assessment = await get_owned_assessment(db, assessment_id, user_id)

    if rag_enabled:
        response = await _rag_answer(ai_client, disease, question, consent_id)
    else:
        response = {
            "question": question,
            "answer": education.demo_answer(disease, question),
            "disease": disease,
            "sources": [],
            "isDemoResponse": True,
            "note": DEMO_NOTE,
        }

    response["historyId"] = None
    if assessment is not None and db is not None:
        message = ChatMessage(
            assessment_id=assessment.id,
            question=question,
            answer=response["answer"],
        )
        db.add(message)
        await db.commit()
        response["historyId"] = str(message.id)

    logger.info(
        "Chat response generated",
        extra={"disease": disease, "assessment_id": assessment_id},
    )
    return response


async def list_history(
    db: AsyncSession,
    user_id: uuid.UUID,
    assessment_id: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[dict]:
    """Newest-first chat history across the caller's assessments."""
    query = (
        select(ChatMessage)
        .join(Assessment, ChatMessage.assessment_id == Assessment.id)
        .where(Assessment.user_id == user_id)
    )
    if assessment_id:
        owned = await get_owned_assessment(db, assessment_id, user_id)
        query = query.where(ChatMessage.assessment_id == owned.id)
    query = query.order_by(ChatMessage.timestamp.desc()).limit(limit).offset(offset)
    result = await db.execute(query)
    return [chat_message_to_dict(m) for m in result.scalars().all()]
