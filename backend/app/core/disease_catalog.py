"""Disease Catalog — pure mapping from a predicted label to educational metadata.

Invariants:
    - normalize_condition_name output only contains [a-z0-9_]
    - lookup() never fails: exact key -> 'unknown' profile -> hard-coded fallback
    - chat_available requires chat_enabled, confidence >= 0.5, and no immediate-attention flag
    - is_chat_enabled() uses exact keys only; unknown labels never unlock chat

Design Decisions:
    - Catalog is an immutable value built from a plain dict: loading (IO) lives in
      services/education_service.py, this module stays pure
    - Raw JSON uses camelCase keys; from_dict() is the only place that knows that
"""

import logging
import re
from dataclasses import dataclass
from typing import Mapping

from app.core.domain_types import (
    CHAT_CONFIDENCE_THRESHOLD, UNKNOWN_CONDITION_KEY, UrgencyLevel,
)

logger = logging.getLogger(__name__)

_ALIASES: dict[str, str] = {
    "atopic dermatitis": "eczema",
    "atopic_dermatitis": "eczema",
    "contact dermatitis": "dermatitis",
    "contact_dermatitis": "dermatitis",
    "acne vulgaris": "acne",
    "acne_vulgaris": "acne",
    "fungal infection": "fungal_infection",
    "ringworm": "fungal_infection",
    "athlete's foot": "fungal_infection",
    "tinea": "fungal_infection",
}

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9_]")

NOTE_CHAT_ENABLED = "Chat enabled - Use /api/chat endpoint for RAG-powered Q&A"
NOTE_URGENT = "URGENT: Seek immediate medical attention"
NOTE_LOW_CONFIDENCE = (
    "Confidence too low for chat - consult healthcare professional"
)


@dataclass(frozen=True)
class DiseaseMetadata:
    """Educational profile for one condition."""
    condition: str
    urgency_level: UrgencyLevel
    requires_immediate_attention: bool
    chat_enabled: bool
    demo_description: str

    @classmethod
    def from_dict(cls, raw: Mapping) -> "DiseaseMetadata":
        return cls(
            condition=str(raw["condition"]),
            urgency_level=UrgencyLevel(raw.get("urgencyLevel", "medium")),
            requires_immediate_attention=bool(
                raw.get("requiresImmediateAttention", False),
            ),
            chat_enabled=bool(raw.get("chatEnabled", False)),
            demo_description=str(raw.get("demoDescription", "")),
        )


FALLBACK_METADATA = DiseaseMetadata(
    condition="Unknown Condition",
    urgency_level=UrgencyLevel.HIGH,
    requires_immediate_attention=False,
    chat_enabled=False,
    demo_description=(
        "Unable to identify condition. "
        "Please consult a healthcare professional."
    ),
)


@dataclass(frozen=True)
class EnrichedPrediction:
    """Prediction plus the metadata the frontend renders."""
    condition: str
    confidence: float
    urgency_level: UrgencyLevel
    requires_immediate_attention: bool
    chat_available: bool
    description: str
    note: str

    def to_dict(self) -> dict:
        return {
            "condition": self.condition,
            "confidence": self.confidence,
            "urgency_level": self.urgency_level.value,
            "requires_immediate_attention": self.requires_immediate_attention,
            "chat_available": self.chat_available,
            "description": self.description,
            "note": self.note,
        }


def normalize_condition_name(condition: str) -> str:
    """Map a model label ('Atopic Dermatitis', 'Fungal Infection') to a catalog key."""
    normalized = condition.lower()
    normalized = _ALIASES.get(normalized, normalized)
    normalized = _WHITESPACE.sub("_", normalized)
    normalized = _DISALLOWED.sub("", normalized)
    return normalized


class DiseaseCatalog:
    """Read-only lookup table keyed by normalized condition name."""

    def __init__(self, entries: Mapping[str, DiseaseMetadata] | None = None):
        self._entries: dict[str, DiseaseMetadata] = dict(entries or {})

    @classmethod
    def from_raw(cls, raw: Mapping[str, Mapping]) -> "DiseaseCatalog":
        return cls({
            key: DiseaseMetadata.from_dict(value) for key, value in raw.items()
        })

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def lookup(self, normalized: str) -> DiseaseMetadata:
        metadata = self._entries.get(normalized)
        if metadata:
            return metadata
        unknown = self._entries.get(UNKNOWN_CONDITION_KEY)
        if unknown:
            logger.warning(
                f"Disease not found: {normalized}, using 'unknown' profile",
            )
            return unknown
        logger.error(f"No metadata found for {normalized}")
        return FALLBACK_METADATA

    def enrich_prediction(
        self, condition: str, confidence: float,
    ) -> EnrichedPrediction:
        """Attach urgency, chat availability and demo description to a prediction."""
        normalized = normalize_condition_name(condition)
        metadata = self.lookup(normalized)
        chat_available = (
            metadata.chat_enabled
            and confidence >= CHAT_CONFIDENCE_THRESHOLD
            and not metadata.requires_immediate_attention
        )
        if chat_available:
            note = NOTE_CHAT_ENABLED
        elif metadata.requires_immediate_attention:
            note = NOTE_URGENT
        else:
            note = NOTE_LOW_CONFIDENCE

        return EnrichedPrediction(
            condition=metadata.condition,
            confidence=confidence,
            urgency_level=metadata.urgency_level,
            requires_immediate_attention=metadata.requires_immediate_attention,
            chat_available=chat_available,
            description=metadata.demo_description,
            note=note,
        )

    def is_chat_enabled(self, condition: str) -> bool:
        metadata = self._entries.get(normalize_condition_name(condition))
        return bool(metadata and metadata.chat_enabled)

    def supported_conditions(self) -> list[str]:
        return [
            m.condition for key, m in self._entries.items()
            if key != UNKNOWN_CONDITION_KEY
        ]
