# =============================================================================
# core/models/post.py - Post Schemas
# =============================================================================
# These models define the API contract for posts:
# - PostCreate: body of POST /api/posts
# - Post: a row of the `posts` table with its author projection
#
# A post carries text, an image, or both. It is never edited or deleted
# through the API.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .profile import PostAuthor


class PostCreate(BaseModel):
    """
    Schema for creating a post.

    Every field is optional here so the route can answer missing fields
    with the documented 400 messages instead of a schema error.

    Example:
        {
            "content": "hello",
            "imageUrl": null,
            "userId": "550e8400-e29b-41d4-a716-446655440000"
        }
    """
    content: str | None = Field(
        default=None,
        description="Post text"
    )
    image_url: str | None = Field(
        default=None,
        alias="imageUrl",
        description="Public URL of an uploaded image"
    )
    user_id: str | None = Field(
        default=None,
        alias="userId",
        description="Author (auth user id)"
    )

    model_config = ConfigDict(populate_by_name=True)


class Post(BaseModel):
    """
    Schema for returning post data to clients.

    Example:
        {
            "id": "7f0c...",
            "content": "hello",
            "image_url": null,
            "created_at": "2024-01-15T10:30:00Z",
            "author_id": "550e8400-...",
            "profiles": {"username": "octocat", "avatar_url": null}
        }
    """
    id: str
    content: str | None = None
    image_url: str | None = None
    created_at: datetime
    author_id: str | None = None
    profiles: PostAuthor | None = None

    @property
    def has_body(self) -> bool:
        """True when the post has non-blank text or an image."""
        return bool((self.content or "").strip() or (self.image_url or "").strip())
