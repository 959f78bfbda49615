"""Request Validation tests — upload field checks and file constraints."""

import pytest

from app.core.errors import FieldError
from app.core.validation import (
    format_size, is_uuid_like, validate_image_upload, validate_upload_constraints,
)

ALLOWED = ["image/jpeg", "image/png", "image/jpg"]
TEN_MB = 10 * 1024 * 1024


def test_uuid_like_is_case_insensitive():
    assert is_uuid_like("9B2F7A52-3F7C-4A39-9C1D-1F0D3B3F0C11")
    assert not is_uuid_like("9b2f7a52-3f7c-4a39-9c1d")
    assert not is_uuid_like("")


def test_valid_upload_has_no_errors():
    assert validate_image_upload(
        True, "9b2f7a52-3f7c-4a39-9c1d-1f0d3b3f0c11",
    ) == []


def test_all_missing_fields_reported_together():
    assert validate_image_upload(False, None) == [
        FieldError("image", "Image File is required"),
        FieldError("consentId", "Consent ID is required"),
    ]


def test_bad_consent_format():
    errors = validate_image_upload(True, "abc")

    assert [e.to_dict() for e in errors] == [
        {"field": "consentId", "message": "Invalid consent ID Format"},
    ]


def test_constraints_accept_allowed_image():
    assert validate_upload_constraints("image/png", 1024, ALLOWED, TEN_MB) is None


def test_constraints_reject_type_before_size():
    message = validate_upload_constraints("image/gif", TEN_MB * 2, ALLOWED, TEN_MB)

    assert message == (
        "Invalid File type. Allowed types: image/jpeg, image/png, image/jpg"
    )


def test_constraints_reject_missing_content_type():
    assert validate_upload_constraints(None, 10, ALLOWED, TEN_MB)


def test_constraints_size_limit_is_inclusive():
    assert validate_upload_constraints("image/jpeg", TEN_MB, ALLOWED, TEN_MB) is None
    assert validate_upload_constraints(
        "image/jpeg", TEN_MB + 1, ALLOWED, TEN_MB,
    ) == "File size too large. Maximum size is 10MB"


@pytest.mark.parametrize("size, label", [
    (TEN_MB, "10MB"),
    (512 * 1024, "512KB"),
    (1536 * 1024, "1536KB"),
    (1500, "1500 bytes"),
])
def test_format_size(size, label):
    assert format_size(size) == label


def test_sub_megabyte_limit_is_not_reported_as_zero():
    message = validate_upload_constraints(
        "image/png", 600 * 1024, ALLOWED, 512 * 1024,
    )

    assert message == "File size too large. Maximum size is 512KB"
