"""Condition Routes — the catalog of conditions the analyzer can explain."""

from fastapi import APIRouter, Depends

from app.core.responses import success_response
from app.services.education_service import EducationService, get_education_service

router = APIRouter(prefix="/api/conditions", tags=["conditions"])


@router.get("")
async def list_conditions(
    education: EducationService = Depends(get_education_service),
):
    return success_response(
        {"conditions": education.supported_conditions()},
        "Supported conditions",
    )
