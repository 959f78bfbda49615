"""User ORM — an account that owns assessments and consent records.

Invariants:
    - email is unique (users_email_key)
    - password stores a bcrypt hash, never plain text
    - updated_at moves on every ORM update

Design Decisions:
    - cascade delete for assessments and consent logs: a user owns both
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    password: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    assessments: Mapped[list["Assessment"]] = relationship(
        "Assessment", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    consent_logs: Mapped[list["ConsentLog"]] = relationship(
        "ConsentLog", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
