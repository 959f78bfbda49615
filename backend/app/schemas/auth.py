"""Auth Schemas — signup/login credentials.

Invariants:
    - Email is trimmed and lowercased before any constraint runs
    - Only presence is required; email length is capped by the users.email column
"""

from pydantic import BaseModel, Field, field_validator


class Credentials(BaseModel):
    """Email + password pair used by both signup and login."""
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v
