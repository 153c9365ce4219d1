# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Uploads post and comment images to Supabase Storage and hands back their
# public URLs. Each kind of image has its own bucket.
# =============================================================================

import logging
import time
from uuid import UUID

from supabase import Client

from app.config import settings
from app.exceptions import ImageTooLargeError, InvalidImageError, StorageUploadError
from core.models.media import (
    TOO_LARGE_MESSAGE,
    ImageKind,
    ImageValidation,
    file_extension,
    validate_image,
)
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    Paths are `{user_id}/{user_id}-{epoch_ms}.{ext}`: grouped per user and
    unique per upload instant. Uploads never overwrite and are never retried.
    """

    def __init__(self, client: Client, buckets: dict[ImageKind, str] | None = None):
        self.client = client
        self.buckets = buckets or {
            ImageKind.POST: settings.POST_IMAGES_BUCKET,
            ImageKind.COMMENT: settings.COMMENT_IMAGES_BUCKET,
        }

    @staticmethod
    def validate(content_type: str | None, size: int) -> ImageValidation:
        """Check type and size; see core.models.media.validate_image."""
        return validate_image(content_type, size)

    def bucket_for(self, kind: ImageKind) -> str:
        return self.buckets[ImageKind(kind)]

    @staticmethod
    def build_path(user_id: UUID | str, filename: str | None, timestamp_ms: int | None = None) -> str:
        """
        Build the storage path for an upload.

        Example:
            build_path("u1", "cat.png", 1700000000000) -> "u1/u1-1700000000000.png"
        """
        user_id_str = normalize_uuid(user_id)
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return f"{user_id_str}/{user_id_str}-{timestamp_ms}.{file_extension(filename)}"

    def upload(
        self,
        content: bytes,
        filename: str | None,
        content_type: str | None,
        user_id: UUID | str,
        kind: ImageKind,
    ) -> str:
        """
        Validate and upload an image, returning its public URL.

        Args:
            content: Raw file bytes
            filename: Original filename (only its extension is kept)
            content_type: MIME type of the file
            user_id: Uploader; first path segment
            kind: post or comment, selects the bucket

        Returns:
            Public URL of the stored image

        Raises:
            InvalidImageError: If the type is not an allowed image
            ImageTooLargeError: If the file is bigger than 5MB
            StorageUploadError: If the upload fails
        """
        kind = ImageKind(kind)
        validation = self.validate(content_type, len(content))
        if not validation.valid:
            if validation.error == TOO_LARGE_MESSAGE:
                raise ImageTooLargeError(validation.error, len(content))
            raise InvalidImageError(validation.error, content_type)

        bucket = self.bucket_for(kind)
        path = self.build_path(user_id, filename)

        try:
            self.client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "false",
                },
            )
            public_url = self.client.storage.from_(bucket).get_public_url(path)

        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e), bucket, path)

        logger.info(f"Uploaded {kind.value} image to {bucket}/{path}")
        return public_url
