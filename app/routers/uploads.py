# =============================================================================
# app/routers/uploads.py - Image Upload Endpoint
# =============================================================================
# POST /api/uploads/{kind}  (kind = post | comment)
#
# Stores an image in the bucket for its kind and returns the public URL,
# which the caller then sends as `imageUrl` when creating the post/comment.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, Path, UploadFile, status
from pydantic import BaseModel, Field

from app.dependencies import StorageServiceDep
from app.exceptions import MissingFieldError
from core.models.media import ImageKind
from lib.utils import is_blank

logger = logging.getLogger(__name__)

router = APIRouter()


class UploadResponse(BaseModel):
    """Where the uploaded image can be fetched from."""
    url: str = Field(..., examples=["https://xyz.supabase.co/storage/v1/object/public/post-images/u1/u1-1700000000000.png"])
    kind: ImageKind


@router.post("/{kind}", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    kind: Annotated[ImageKind, Path(description="What the image is attached to")],
    file: Annotated[UploadFile, File(description="JPEG, PNG, GIF or WebP image, max 5MB")],
    storage: StorageServiceDep,
    user_id: Annotated[str | None, Form(description="Uploader (auth user id)")] = None,
):
    """
    Upload an image for a post or a comment.

    This endpoint:
    1. Checks the uploader id
    2. Validates the type and size
    3. Uploads to the bucket for `kind`
    4. Returns the public URL
    """
    if is_blank(user_id):
        raise MissingFieldError("userId is required", ["userId"])

    content = await file.read()
    logger.info(f"Processing {kind.value} image upload: {file.filename} ({len(content)} bytes)")

    url = storage.upload(
        content=content,
        filename=file.filename,
        content_type=file.content_type,
        user_id=user_id,
        kind=kind,
    )

    return UploadResponse(url=url, kind=kind)
