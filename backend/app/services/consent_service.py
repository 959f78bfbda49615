"""Consent Service — records which user accepted which consent session.

Invariants:
    - consent_id is owned by exactly one user
    - Re-recording a consent id for its owner is a no-op returning the existing row
    - Recording a consent id owned by someone else -> 409
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError
from app.models import ConsentLog

logger = logging.getLogger(__name__)


def consent_to_dict(log: ConsentLog) -> dict:
    return {
        "id": str(log.id),
        "consentId": log.consent_id,
        "userId": str(log.user_id),
        "timestamp": log.timestamp.isoformat(),
    }


async def record_consent(
    db: AsyncSession, user_id: uuid.UUID, consent_id: str,
) -> tuple[ConsentLog, bool]:
    """Return (log, created). Does not commit when nothing changed."""
    consent_id = consent_id.lower()
    result = await db.execute(
        select(ConsentLog).where(ConsentLog.consent_id == consent_id),
    )
    existing = result.scalar_one_or_none()
    if existing:
        if existing.user_id != user_id:
            raise ConflictError(
                "Consent ID already belongs to another user", "CONSENT_TAKEN",
            )
        return existing, False

    log = ConsentLog(user_id=user_id, consent_id=consent_id)
    db.add(log)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(
            "Consent ID already belongs to another user", "CONSENT_TAKEN",
        )
    logger.info(
        "Consent recorded",
        extra={"consent_id": consent_id, "user_id": str(user_id)},
    )
    return log, True
