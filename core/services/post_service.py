# =============================================================================
# core/services/post_service.py - Post Business Logic
# =============================================================================
# Reads and writes the `posts` table. The only business rule in the system
# lives here: a post needs non-blank text or an image. The rule is checked
# before any backend call, so a rejected post never reaches the database.
# =============================================================================

import logging
from uuid import UUID

from supabase import Client

from app.exceptions import MissingFieldError, PostContentRequiredError
from core.models.post import Post
from lib.supabase_client import SupabaseClientError
from lib.utils import is_blank, normalize_uuid

logger = logging.getLogger(__name__)

# Columns returned for every post, with the author's profile embedded
POST_COLUMNS = "id, content, image_url, created_at, author_id, profiles(username, avatar_url)"


class PostService:
    """
    Service for post operations.

    Provides a clean interface between API routes and the `posts` table.
    """

    def __init__(self, client: Client):
        self.client = client

    def list_posts(self) -> list[Post]:
        """
        Fetch every post, newest first, with its author projection.

        Returns:
            List of posts ordered by created_at descending

        Raises:
            SupabaseClientError: If the query fails
        """
        try:
            response = (
                self.client.table("posts")
                .select(POST_COLUMNS)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch posts: {e}",
                code="FETCH_POSTS_FAILED",
                suggestion="Check that the posts table and its profiles relation are accessible",
            )

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} posts")
        return [Post.model_validate(row) for row in rows]

    def create_post(
        self,
        user_id: UUID | str | None,
        content: str | None = None,
        image_url: str | None = None,
    ) -> Post:
        """
        Create a post and return it with its author projection.

        Args:
            user_id: Author (auth user id)
            content: Post text; stored as null when blank
            image_url: Public image URL; stored as null when blank

        Returns:
            The created post

        Raises:
            MissingFieldError: If user_id is missing
            PostContentRequiredError: If both content and image_url are blank
            SupabaseClientError: If the insert or the read-back fails
        """
        author_id = normalize_uuid(user_id) if user_id is not None else None
        if is_blank(author_id):
            raise MissingFieldError("userId is required", ["userId"])

        has_text = not is_blank(content)
        has_image = not is_blank(image_url)
        if not has_text and not has_image:
            raise PostContentRequiredError()

        data = {
            "author_id": author_id,
            "content": content if has_text else None,
            "image_url": image_url if has_image else None,
        }

        try:
            inserted = (
                self.client.table("posts")
                .insert(data)
                .execute()
            )
            if not inserted.data:
                raise SupabaseClientError(
                    message="Insert returned no data",
                    code="INSERT_NO_DATA"
                )

            post_id = inserted.data[0]["id"]

            # Read back through the select that embeds the author
            response = (
                self.client.table("posts")
                .select(POST_COLUMNS)
                .eq("id", post_id)
                .single()
                .execute()
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create post: {e}",
                code="INSERT_POST_FAILED",
                details={"author_id": author_id}
            )

        logger.info(f"Created post {post_id} for user {author_id}")
        return Post.model_validate(response.data)
