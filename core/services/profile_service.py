# =============================================================================
# core/services/profile_service.py - Profile Sync
# =============================================================================
# Mirrors the identity provider's view of a user into the `profiles` table.
# Called after every successful login; the upsert is keyed by user id, so
# repeated logins keep one row carrying the latest metadata.
#
# Sync failures are logged and returned, never raised: a login must succeed
# even when the profile could not be written.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from supabase import Client

from core.models.profile import Profile
from core.models.result import ServiceResult
from lib.supabase_client import SupabaseClientError
from lib.utils import get_field, normalize_uuid

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "anonymous"


def profile_row_for(user: Any) -> dict[str, Any]:
    """
    Build the `profiles` row for a backend user.

    username: provider `user_name`, else the email's local part, else "anonymous".
    avatar_url: provider `avatar_url`, else None.
    """
    metadata = get_field(user, "user_metadata") or {}
    email = get_field(user, "email")

    username = metadata.get("user_name")
    if not username and email:
        username = email.split("@")[0]

    return {
        "id": str(get_field(user, "id")),
        "username": username or DEFAULT_USERNAME,
        "avatar_url": metadata.get("avatar_url") or None,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }


class ProfileService:
    """Service for the `profiles` table."""

    def __init__(self, client: Client):
        self.client = client

    def ensure_profile(self, user: Any) -> ServiceResult[Profile | None]:
        """
        Insert or refresh the profile of a signed-in user.

        Args:
            user: Backend auth user (SDK object or mapping with id, email,
                user_metadata)

        Returns:
            ServiceResult with the stored profile, or the sync error
        """
        try:
            row = profile_row_for(user)
            response = (
                self.client.table("profiles")
                .upsert(row, on_conflict="id")
                .execute()
            )
        except Exception as e:
            logger.error(f"Error syncing profile: {e}")
            error = SupabaseClientError(
                message=f"Failed to sync profile: {e}",
                code="PROFILE_SYNC_FAILED",
                details={"user_id": str(get_field(user, "id"))}
            )
            return ServiceResult.failure(error, data=None)

        rows = response.data or []
        profile = Profile.model_validate(rows[0]) if rows else None
        logger.debug(f"Synced profile for user {row['id']}")
        return ServiceResult.success(profile)

    def get_profile(self, user_id: UUID | str) -> Profile | None:
        """
        Fetch a profile by user id.

        Returns:
            Profile, or None if the user never logged in

        Raises:
            SupabaseClientError: If the query fails
        """
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                self.client.table("profiles")
                .select("*")
                .eq("id", user_id_str)
                .single()
                .execute()
            )
        except Exception as e:
            if "PGRST116" in str(e):  # PostgREST code for no rows
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch profile: {e}",
                code="FETCH_PROFILE_FAILED",
                details={"user_id": user_id_str}
            )

        return Profile.model_validate(response.data) if response.data else None
