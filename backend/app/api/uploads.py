"""Image Uploads — reads a multipart image into memory and enforces type/size limits.

Invariants:
    - Multipart parsing has already spooled the part to a temporary file by the time
      this runs; at most max_file_size + 1 bytes of it are copied into memory
    - MIME type is checked before size (same order the client sees errors)
"""

from fastapi import UploadFile

from app.config import Settings
from app.core.errors import BadRequestError
from app.core.validation import validate_upload_constraints
from app.services.assessment_service import ImageUpload


async def read_image_upload(file: UploadFile, settings: Settings) -> ImageUpload:
    content = await file.read(settings.max_file_size + 1)
    rejection = validate_upload_constraints(
        file.content_type,
        len(content),
        settings.allowed_mime_types,
        settings.max_file_size,
    )
    if rejection:
        raise BadRequestError(rejection, "INVALID_UPLOAD")
    return ImageUpload(
        content=content,
        filename=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
    )
