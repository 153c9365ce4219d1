# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used by both the server and the API client.
# =============================================================================

from typing import Any
from uuid import UUID


# =============================================================================
# Identifier / String Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def is_blank(value: Any) -> bool:
    """True for None, non-strings and strings that are empty after strip()."""
    return not isinstance(value, str) or not value.strip()


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """
    Read `name` from an SDK object or a plain mapping.

    The Supabase SDK hands back pydantic objects while tests and callers
    may pass dicts; either shape is accepted.
    """
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class FetchError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="FETCH_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
