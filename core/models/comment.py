# =============================================================================
# core/models/comment.py - Comment Schemas
# =============================================================================
# These models define the API contract for comments on a post:
# - CommentCreate: body of POST /api/posts/{post_id}/comments
# - Comment: a row of the `comments` table with its author projection
#
# Unlike posts, a comment always needs text; the image is an optional extra.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .profile import AuthorProjection


class CommentCreate(BaseModel):
    """Schema for creating a comment (post id comes from the path)."""
    content: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    user_id: str | None = Field(default=None, alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class Comment(BaseModel):
    """
    Schema for returning comment data to clients.

    Example:
        {
            "id": "c1",
            "content": "Great post!",
            "image_url": null,
            "created_at": "2024-01-15T10:31:00Z",
            "post_id": "7f0c...",
            "author_id": "550e8400-...",
            "author": {"id": "550e8400-...", "username": "octocat", "avatar_url": null}
        }
    """
    id: str
    content: str
    image_url: str | None = None
    created_at: datetime
    post_id: str | None = None
    author_id: str | None = None
    author: AuthorProjection | None = None
