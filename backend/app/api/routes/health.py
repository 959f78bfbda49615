"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/health always returns 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable (readiness);
      an unreachable AI service is reported but does not fail readiness
"""

import logging
import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import app.infrastructure.database as database
from app.core.responses import utc_timestamp
from app.infrastructure.ai_client import AIServiceClient, get_ai_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe."""
    return {
        "status": "healthy",
        "timeStamp": utc_timestamp(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }


@router.get("/ready")
async def readiness_check(ai_client: AIServiceClient = Depends(get_ai_client)):
    """Readiness probe — database required, AI service informational."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    ai_ok = await ai_client.health_check()
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "ai_service": "healthy" if ai_ok else "unavailable",
    }
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": checks,
            },
        )
    return {"status": "ready", "checks": checks}
