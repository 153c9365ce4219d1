# =============================================================================
# app/exceptions.py - Custom Exceptions & Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Local validation errors are raised before any backend call, so a rejected
# request never writes anything. Backend failures arrive as
# SupabaseClientError and become 500 responses.
#
# Every error body carries an "error" message:
#   {"error": "Either content or imageUrl is required", "code": "CONTENT_REQUIRED"}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class PostboardException(Exception):
    """
    Base exception for the Postboard API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "POSTBOARD_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFieldError(PostboardException):
    """Raised when a required request field is missing or blank."""

    def __init__(self, message: str, fields: list[str]):
        super().__init__(
            message=message,
            code="MISSING_FIELD",
            status_code=400,
            details={"fields": fields}
        )


class PostContentRequiredError(PostboardException):
    """Raised when a post has neither text nor an image."""

    def __init__(self):
        super().__init__(
            message="Either content or imageUrl is required",
            code="CONTENT_REQUIRED",
            status_code=400,
            suggestion="Send non-blank content, an imageUrl, or both",
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class NotAuthenticatedError(PostboardException):
    """Raised when a bearer token is missing, invalid or expired."""

    def __init__(self, reason: str = "Not authenticated"):
        super().__init__(
            message=reason,
            code="NOT_AUTHENTICATED",
            status_code=401,
            suggestion="Sign in again via /auth/login and send the access token as a Bearer token",
        )


class SignOutError(PostboardException):
    """Raised when the backend refuses to end the session."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to sign out: {error}",
            code="SIGN_OUT_FAILED",
            status_code=500,
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidImageError(PostboardException):
    """Raised when an uploaded file is not an allowed image type."""

    def __init__(self, message: str, content_type: str | None):
        super().__init__(
            message=message,
            code="INVALID_FILE_TYPE",
            status_code=400,
            details={"content_type": content_type}
        )


class ImageTooLargeError(PostboardException):
    """Raised when an uploaded image exceeds the size cap."""

    def __init__(self, message: str, size: int):
        super().__init__(
            message=message,
            code="FILE_TOO_LARGE",
            status_code=413,
            details={"size_bytes": size}
        )


class StorageUploadError(PostboardException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str, bucket: str, path: str):
        super().__init__(
            message=f"Failed to upload image: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Upload the image again; failed uploads are not retried",
            details={"bucket": bucket, "path": path}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def postboard_exception_handler(
    request: Request,
    exc: PostboardException
) -> JSONResponse:
    """Convert PostboardException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """Backend failures surface as 500 with the backend's message."""
    logger.error(f"Supabase {request.method} {request.url.path} error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": exc.message,
            "code": exc.code,
        }
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request body validation errors.

    Malformed JSON or wrongly typed fields are client errors (400), in line
    with the other field checks.
    """
    logger.warning(f"Rejected request body for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "code": "VALIDATION_ERROR",
        }
    )
