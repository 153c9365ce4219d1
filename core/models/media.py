# =============================================================================
# core/models/media.py - Image Upload Rules
# =============================================================================
# Images attached to posts and comments are validated the same way on the
# server (before touching storage) and in the API client (before sending).
# =============================================================================

from enum import Enum

from pydantic import BaseModel

MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024

ALLOWED_IMAGE_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
)

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload a JPEG, PNG, GIF, or WebP image."
TOO_LARGE_MESSAGE = "File size too large. Maximum size is 5MB."


class ImageKind(str, Enum):
    """What an uploaded image is attached to; selects the storage bucket."""
    POST = "post"
    COMMENT = "comment"


class ImageValidation(BaseModel):
    """Outcome of validate_image()."""
    valid: bool
    error: str | None = None


def validate_image(content_type: str | None, size: int) -> ImageValidation:
    """
    Check an image against the type allow-list and the size cap.

    Args:
        content_type: MIME type reported for the file
        size: File size in bytes

    Returns:
        ImageValidation with a human-readable reason when invalid
    """
    if (content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        return ImageValidation(valid=False, error=INVALID_TYPE_MESSAGE)

    if size > MAX_IMAGE_SIZE_BYTES:
        return ImageValidation(valid=False, error=TOO_LARGE_MESSAGE)

    return ImageValidation(valid=True)


def file_extension(filename: str | None) -> str:
    """
    Extension of a filename without the dot, case preserved.

    "cat.photo.PNG" -> "PNG"; names without a dot return the whole name.
    """
    name = filename or ""
    return name.rsplit(".", 1)[-1]
