"""Request Validation — pure checks that collect every field error at once.

Invariants:
    - Functions return a list of FieldError; empty list means valid
    - Never raise: the caller decides whether errors become a 400
    - consentId must be UUID-shaped (8-4-4-4-12 hex, case-insensitive)
"""

import re

from app.core.errors import FieldError

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_uuid_like(value: str) -> bool:
    return bool(_UUID_PATTERN.match(value))


def format_size(size: int) -> str:
    """Largest whole unit: 10485760 -> "10MB", 524288 -> "512KB", 1500 -> "1500 bytes"."""
    for unit, factor in (("MB", 1024 * 1024), ("KB", 1024)):
        if size >= factor and size % factor == 0:
            return f"{size // factor}{unit}"
    return f"{size} bytes"


def validate_image_upload(
    has_image: bool, consent_id: str | None,
) -> list[FieldError]:
    errors: list[FieldError] = []
    if not has_image:
        errors.append(FieldError("image", "Image File is required"))
    if not consent_id:
        errors.append(FieldError("consentId", "Consent ID is required"))
    elif not is_uuid_like(consent_id):
        errors.append(FieldError("consentId", "Invalid consent ID Format"))
    return errors


def validate_upload_constraints(
    content_type: str | None,
    size: int,
    allowed_types: list[str],
    max_size: int,
) -> str | None:
    """Return the rejection message for an upload, or None when it is acceptable."""
    if content_type not in allowed_types:
        return f"Invalid File type. Allowed types: {', '.join(allowed_types)}"
    if size > max_size:
        return f"File size too large. Maximum size is {format_size(max_size)}"
    return None
