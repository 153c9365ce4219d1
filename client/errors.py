# =============================================================================
# client/errors.py - API Client Errors
# =============================================================================
# Errors carried inside ServiceResult by the API client. They are returned,
# not raised: a view shows the message and stays usable.
# =============================================================================

from lib.utils import ApplicationError


class LocalValidationError(ApplicationError):
    """Input rejected before any request was sent."""

    def __init__(self, message: str):
        super().__init__(message, code="LOCAL_VALIDATION")


class FetchError(ApplicationError):
    """Transport failure or non-2xx response from the API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message,
            code="FETCH_ERROR",
            details={"status_code": status_code} if status_code else None,
        )
        self.status_code = status_code


class UploadError(ApplicationError):
    """Image rejected locally or refused by the upload endpoint."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message,
            code="UPLOAD_ERROR",
            details={"status_code": status_code} if status_code else None,
        )
        self.status_code = status_code
