"""ORM Models — SQLAlchemy declarative models for the four persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; assessments and consent logs hang off it,
      chat history hangs off assessments

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.assessment import Assessment  # noqa: F401
from app.models.chat_message import ChatMessage  # noqa: F401
from app.models.consent_log import ConsentLog  # noqa: F401
