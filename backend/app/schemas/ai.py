"""AI Service Schemas — shapes returned by the prediction and RAG services.

Invariants:
    - AIAnalyzeResponse is valid only with success=True and a prediction
    - Unknown upstream fields are ignored, never rejected
"""

from pydantic import BaseModel, ConfigDict, Field

from app.core.domain_types import PredictionSeverity


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore", protected_namespaces=())


class RankedLabel(_Upstream):
    label: str
    confidence: float


class AIPrediction(_Upstream):
    condition: str = Field(min_length=1)
    confidence: float = Field(ge=0.0, le=1.0)
    top_predictions: list[RankedLabel] | None = None
    severity: PredictionSeverity | None = None
    characteristics_detected: list[str] | None = None
    processing_time: float | None = None


class AIMetadata(_Upstream):
    model_version: str | None = None
    processing_time: float | None = None


class AIAnalyzeResponse(_Upstream):
    success: bool
    prediction: AIPrediction
    metadata: AIMetadata | None = None


class AIChatResponse(_Upstream):
    success: bool
    answer: str = Field(min_length=1)
    sources: list[str] = Field(default_factory=list)
    context: str | None = None
