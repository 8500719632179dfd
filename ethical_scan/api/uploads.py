"""Image upload validation for multipart endpoints.

Accepts images up to 10MB in the common web formats.
"""

import os
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from ethical_scan.domain.shared.errors import ValidationError

# Maximum file size: 10MB
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes

# Allowed image MIME types
ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
}

# Allowed file extensions
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}


@dataclass(frozen=True)
class ImageUpload:
    data: bytes
    filename: str
    content_type: str


def validate_file(file: UploadFile) -> None:
    """Validate uploaded file metadata.

    Args:
        file: Uploaded file to validate.

    Raises:
        ValidationError: If file type or extension is not allowed.
    """
    # Check content type
    if file.content_type not in ALLOWED_MIME_TYPES:
        allowed = ", ".join(sorted(ALLOWED_MIME_TYPES))
        raise ValidationError(f"Invalid file type. Allowed: {allowed}")

    # Check file extension
    if file.filename:
        ext = os.path.splitext(file.filename)[1].lower()
        if ext and ext not in ALLOWED_EXTENSIONS:
            allowed_ext = ", ".join(sorted(ALLOWED_EXTENSIONS))
            raise ValidationError(f"Invalid file extension. Allowed: {allowed_ext}")


async def read_image_upload(file: Optional[UploadFile]) -> ImageUpload:
    """Validate and read an uploaded image.

    Raises:
        ValidationError: If missing, empty, too large or not an image.
    """
    if file is None:
        raise ValidationError("No image uploaded")

    validate_file(file)

    data = await file.read()
    if not data:
        raise ValidationError("Uploaded image is empty")
    if len(data) > MAX_FILE_SIZE:
        raise ValidationError(f"Image too large. Maximum size: {MAX_FILE_SIZE // (1024 * 1024)}MB")

    return ImageUpload(
        data=data,
        filename=file.filename or "image.jpg",
        content_type=file.content_type or "image/jpeg",
    )
