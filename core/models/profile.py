# =============================================================================
# core/models/profile.py - User & Profile Schemas
# =============================================================================
# Identity flows in from the OAuth provider and is mirrored into the
# `profiles` table:
# - User: the application's view of the signed-in identity
# - Profile: the persisted row, upserted on every login (keyed by user id)
# - PostAuthor / AuthorProjection: the slices of Profile embedded in posts
#   and in comments (comments also carry the profile id)
#
# Profile is a derived cache of identity-provider data, not a source of truth.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field


class User(BaseModel):
    """
    Signed-in user, normalized from the backend's auth user.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "octocat@example.com",
            "username": "octocat",
            "avatar_url": "https://avatars.githubusercontent.com/u/1"
        }
    """
    id: str
    email: str | None = None
    username: str | None = None
    avatar_url: str | None = None

    model_config = {"frozen": True}


class Profile(BaseModel):
    """
    Row of the `profiles` table.

    `id` is the auth user id and the upsert conflict key.
    """
    id: str
    username: str
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PostAuthor(BaseModel):
    """Author fields joined into post responses."""
    username: str | None = None
    avatar_url: str | None = None


class AuthorProjection(BaseModel):
    """Author fields joined into comment responses."""
    id: str | None = Field(
        default=None,
        description="Profile id (present on comment authors)"
    )
    username: str | None = None
    avatar_url: str | None = None


class CurrentUserResponse(BaseModel):
    """Response of GET /api/auth/me."""
    user: User
    profile: Profile | None = None
