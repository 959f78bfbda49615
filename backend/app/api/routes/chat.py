"""Chat Routes — RAG-backed Q&A about a diagnosed condition, and stored history."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import optional_user_id, require_user_id
from app.config import Settings, get_settings
from app.core.responses import success_response
from app.infrastructure.ai_client import AIServiceClient, get_ai_client
from app.infrastructure.database import get_db
from app.schemas.chat import ChatRequest
from app.services import chat_service
from app.services.education_service import EducationService, get_education_service

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("")
async def chat_with_rag(
    body: ChatRequest,
    user_id: uuid.UUID | None = Depends(optional_user_id),
    settings: Settings = Depends(get_settings),
    ai_client: AIServiceClient = Depends(get_ai_client),
    education: EducationService = Depends(get_education_service),
    db: AsyncSession = Depends(get_db),
):
    data = await chat_service.answer_question(
        disease=body.disease,
        question=body.question,
        consent_id=body.consent_id,
        education=education,
        ai_client=ai_client,
        rag_enabled=settings.rag_enabled,
        db=db,
        user_id=user_id,
        assessment_id=body.assessment_id,
    )
    return success_response(data, "Answer generated successfully")


@router.get("/history")
async def chat_history(
    assessment_id: str | None = Query(None, alias="assessmentId"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    history = await chat_service.list_history(
        db, user_id, assessment_id, limit=limit, offset=offset,
    )
    return success_response(
        {"history": history, "pagination": {"limit": limit, "offset": offset}},
        "Chat history retrieved successfully",
    )
