"""Consent Schemas — the record the consent page submits."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

_UUID_SHAPE = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-"
    r"[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


class ConsentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    consent_id: str = Field(alias="consentId", pattern=_UUID_SHAPE)
    medical_disclaimer_agreed: bool = Field(alias="medicalDisclaimerAgreed")
    data_processing_agreed: bool = Field(alias="dataProcessingAgreed")
    timestamp: datetime | None = None

    @model_validator(mode="after")
    def require_both_agreements(self):
        if not (self.medical_disclaimer_agreed and self.data_processing_agreed):
            raise ValueError(
                "Both the medical disclaimer and data processing terms must be accepted",
            )
        return self
