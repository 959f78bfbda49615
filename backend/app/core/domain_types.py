"""Domain Types — enums and thresholds shared across the domain.

Invariants:
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class UrgencyLevel(str, Enum):
    """How quickly a condition should be seen by a professional."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PredictionSeverity(str, Enum):
    """Optional severity reported by the prediction service."""
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class AssessmentStatus(str, Enum):
    """Analysis is synchronous: a stored assessment is always completed."""
    COMPLETED = "completed"


# ─── Constants ───────────────────────────────────────────────────

CHAT_CONFIDENCE_THRESHOLD: float = 0.5
UNKNOWN_CONDITION_KEY = "unknown"
