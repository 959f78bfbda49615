"""Education Service — loads the disease catalog and serves enrichment lookups.

Invariants:
    - A missing or malformed catalog file never crashes the app: empty catalog + error log
    - One catalog per process (get_education_service is cached)

Design Decisions:
    - Pure lookup rules live in core/disease_catalog.py; this module owns the file IO
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from app.config import get_settings
from app.core.demo_answers import demo_rag_response
from app.core.disease_catalog import DiseaseCatalog, EnrichedPrediction

logger = logging.getLogger(__name__)


def load_disease_catalog(path: Path) -> DiseaseCatalog:
    """Read the JSON lookup table keyed by normalized condition name."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("disease database must be a JSON object")
        catalog = DiseaseCatalog.from_raw(raw)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Failed to load disease database from {path}: {e}")
        return DiseaseCatalog()
    logger.info(f"Loaded {len(catalog)} disease profiles")
    return catalog


class EducationService:
    """Facade over the catalog used by routes and flows."""

    def __init__(self, catalog: DiseaseCatalog):
        self.catalog = catalog

    def enrich_prediction(
        self, condition: str, confidence: float,
    ) -> EnrichedPrediction:
        result = self.catalog.enrich_prediction(condition, confidence)
        logger.debug(
            f"Enriched prediction for {condition}",
            extra={
                "condition": result.condition,
                "urgency_level": result.urgency_level.value,
                "chat_available": result.chat_available,
            },
        )
        return result

    def is_chat_enabled(self, condition: str) -> bool:
        return self.catalog.is_chat_enabled(condition)

    def supported_conditions(self) -> list[str]:
        return self.catalog.supported_conditions()

    def demo_answer(self, disease: str, question: str) -> str:
        return demo_rag_response(disease, question)


@lru_cache
def get_education_service() -> EducationService:
    """FastAPI dependency; loads the catalog on first use."""
    return EducationService(load_disease_catalog(get_settings().diseases_path))
