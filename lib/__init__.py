# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Shared Supabase client and its error type
# - utils.py: Shared utilities (error base class, UUID normalization)
#
# supabase_client reads app.config at import time, so it is not re-exported
# here; the API client package only needs utils.
# =============================================================================

from lib.utils import ApplicationError, get_field, is_blank, normalize_uuid

__all__ = [
    "ApplicationError",
    "get_field",
    "is_blank",
    "normalize_uuid",
]
