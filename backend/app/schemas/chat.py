"""Chat Schemas — RAG question payload."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRequest(BaseModel):
    """Question about a diagnosed condition."""
    model_config = ConfigDict(populate_by_name=True)

    disease: str = Field(min_length=1, max_length=200)
    question: str = Field(max_length=2000)
    consent_id: str | None = Field(None, alias="consentId")
    assessment_id: str | None = Field(None, alias="assessmentId")

    @field_validator("question")
    @classmethod
    def strip_question(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Question is Required")
        return v

    @field_validator("disease")
    @classmethod
    def strip_disease(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Disease information is required")
        return v
