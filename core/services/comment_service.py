# =============================================================================
# core/services/comment_service.py - Comment Business Logic
# =============================================================================
# Reads and writes the `comments` table. Comments are listed oldest first so
# a thread reads top to bottom. A comment always needs text; an image alone
# is not enough.
# =============================================================================

import logging
from uuid import UUID

from supabase import Client

from app.exceptions import MissingFieldError
from core.models.comment import Comment
from lib.supabase_client import SupabaseClientError
from lib.utils import is_blank, normalize_uuid

logger = logging.getLogger(__name__)

COMMENT_COLUMNS = (
    "id, content, image_url, created_at, post_id, author_id, "
    "author:profiles(id, username, avatar_url)"
)


class CommentService:
    """Service for comment operations on a single post."""

    def __init__(self, client: Client):
        self.client = client

    @staticmethod
    def _require_post_id(post_id: UUID | str | None) -> str:
        post_id_str = normalize_uuid(post_id) if post_id is not None else None
        if is_blank(post_id_str):
            raise MissingFieldError("postId is required", ["postId"])
        return post_id_str

    def list_comments(self, post_id: UUID | str | None) -> list[Comment]:
        """
        Fetch the comments of a post, oldest first.

        Raises:
            MissingFieldError: If post_id is blank
            SupabaseClientError: If the query fails
        """
        post_id_str = self._require_post_id(post_id)

        try:
            response = (
                self.client.table("comments")
                .select(COMMENT_COLUMNS)
                .eq("post_id", post_id_str)
                .order("created_at", desc=False)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch comments: {e}",
                code="FETCH_COMMENTS_FAILED",
                details={"post_id": post_id_str}
            )

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} comments for post {post_id_str}")
        return [Comment.model_validate(row) for row in rows]

    def create_comment(
        self,
        post_id: UUID | str | None,
        user_id: UUID | str | None,
        content: str | None,
        image_url: str | None = None,
    ) -> Comment:
        """
        Create a comment on a post.

        Args:
            post_id: Post being commented on
            user_id: Author (auth user id)
            content: Comment text; must be non-blank
            image_url: Optional public image URL

        Returns:
            The created comment with its author projection

        Raises:
            MissingFieldError: If post_id, content or user_id is missing
            SupabaseClientError: If the insert or the read-back fails
        """
        post_id_str = self._require_post_id(post_id)

        author_id = normalize_uuid(user_id) if user_id is not None else None
        if is_blank(content) or is_blank(author_id):
            raise MissingFieldError(
                "content and userId are required",
                ["content", "userId"],
            )

        data = {
            "post_id": post_id_str,
            "author_id": author_id,
            "content": content,
            "image_url": None if is_blank(image_url) else image_url,
        }

        try:
            inserted = (
                self.client.table("comments")
                .insert(data)
                .execute()
            )
            if not inserted.data:
                raise SupabaseClientError(
                    message="Insert returned no data",
                    code="INSERT_NO_DATA"
                )

            comment_id = inserted.data[0]["id"]

            response = (
                self.client.table("comments")
                .select(COMMENT_COLUMNS)
                .eq("id", comment_id)
                .single()
                .execute()
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create comment: {e}",
                code="INSERT_COMMENT_FAILED",
                details={"post_id": post_id_str, "author_id": author_id}
            )

        logger.info(f"Created comment {comment_id} on post {post_id_str}")
        return Comment.model_validate(response.data)
