# =============================================================================
# client/api.py - HTTP Client for the Postboard API
# =============================================================================
# Typed wrappers over the JSON endpoints:
# - PostsClient:    GET/POST /api/posts
# - CommentsClient: GET/POST /api/posts/{post_id}/comments
# - UploadsClient:  POST /api/uploads/{kind}
#
# Every call returns a ServiceResult. Input that breaks a rule is rejected
# before a request goes out; transport and HTTP failures come back as
# FetchError/UploadError with an empty value in `data`.
#
# Usage:
#   http = httpx.Client(base_url="http://localhost:8000")
#   result = PostsClient(http).list()
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from client.errors import FetchError, LocalValidationError, UploadError
from core.models.comment import Comment
from core.models.media import ImageKind, validate_image
from core.models.post import Post
from core.models.result import ServiceResult
from lib.utils import is_blank

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Prefer the API's {"error": ...} message over a generic one."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    message = body.get("error") if isinstance(body, dict) else None
    return message or f"{fallback} (status {response.status_code})"


@dataclass
class ImageFile:
    """An image picked by the user, not yet uploaded."""
    content: bytes
    filename: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class PostsClient:
    """Client for the posts endpoints."""

    API_BASE = "/api/posts"

    def __init__(self, http: httpx.Client):
        self.http = http

    def list(self) -> ServiceResult[list[Post]]:
        """Fetch all posts, newest first. Never raises."""
        try:
            response = self.http.get(self.API_BASE)
            if response.is_error:
                error = FetchError(_error_message(response, "Failed to fetch posts"), response.status_code)
                return ServiceResult.failure(error, data=[])
            posts = [Post.model_validate(item) for item in response.json()]
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error fetching posts: {e}")
            return ServiceResult.failure(FetchError(str(e) or "Failed to fetch posts"), data=[])

        return ServiceResult.success(posts)

    def create(
        self,
        user_id: str,
        content: str | None = None,
        image_url: str | None = None,
    ) -> ServiceResult[Post | None]:
        """
        Create a post with text, an image URL, or both.

        Returns a LocalValidationError without calling the API when both
        are blank.
        """
        if is_blank(content) and is_blank(image_url):
            return ServiceResult.failure(
                LocalValidationError("Post must contain either text or an image"),
                data=None,
            )

        payload = {
            "content": content or None,
            "imageUrl": image_url or None,
            "userId": user_id,
        }

        try:
            response = self.http.post(self.API_BASE, json=payload)
            if response.is_error:
                error = FetchError(_error_message(response, "Failed to create post"), response.status_code)
                return ServiceResult.failure(error, data=None)
            post = Post.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error creating post: {e}")
            return ServiceResult.failure(FetchError(str(e) or "Failed to create post"), data=None)

        return ServiceResult.success(post)


class CommentsClient:
    """Client for the comment endpoints of a post."""

    def __init__(self, http: httpx.Client):
        self.http = http

    @staticmethod
    def _api_base(post_id: str) -> str:
        return f"/api/posts/{post_id}/comments"

    def list_by_post(self, post_id: str) -> ServiceResult[list[Comment]]:
        """Fetch the comments of a post, oldest first. Never raises."""
        try:
            response = self.http.get(self._api_base(post_id))
            if response.is_error:
                error = FetchError(_error_message(response, "Failed to fetch comments"), response.status_code)
                return ServiceResult.failure(error, data=[])
            comments = [Comment.model_validate(item) for item in response.json()]
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error fetching comments for post {post_id}: {e}")
            return ServiceResult.failure(FetchError(str(e) or "Failed to fetch comments"), data=[])

        return ServiceResult.success(comments)

    def create(
        self,
        post_id: str,
        user_id: str,
        content: str | None,
        image_url: str | None = None,
    ) -> ServiceResult[Comment | None]:
        """
        Add a comment to a post.

        Text is required even when an image is attached; blank text is
        rejected without calling the API.
        """
        if is_blank(content):
            return ServiceResult.failure(
                LocalValidationError("Comment content is required"),
                data=None,
            )

        payload = {
            "content": content,
            "imageUrl": image_url or None,
            "userId": user_id,
        }

        try:
            response = self.http.post(self._api_base(post_id), json=payload)
            if response.is_error:
                error = FetchError(_error_message(response, "Failed to create comment"), response.status_code)
                return ServiceResult.failure(error, data=None)
            comment = Comment.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error creating comment on post {post_id}: {e}")
            return ServiceResult.failure(FetchError(str(e) or "Failed to create comment"), data=None)

        return ServiceResult.success(comment)


class UploadsClient:
    """Client for the image upload endpoint."""

    API_BASE = "/api/uploads"

    def __init__(self, http: httpx.Client):
        self.http = http

    def upload(
        self,
        image: ImageFile,
        user_id: str,
        kind: ImageKind,
    ) -> ServiceResult[str | None]:
        """
        Upload an image and return its public URL.

        The type/size check runs locally first; nothing is sent for an
        invalid file. Failed uploads are not retried.
        """
        kind = ImageKind(kind)
        validation = validate_image(image.content_type, image.size)
        if not validation.valid:
            return ServiceResult.failure(UploadError(validation.error), data=None)

        try:
            response = self.http.post(
                f"{self.API_BASE}/{kind.value}",
                files={"file": (image.filename, image.content, image.content_type)},
                data={"user_id": user_id},
            )
            if response.is_error:
                error = UploadError(_error_message(response, "Upload failed"), response.status_code)
                return ServiceResult.failure(error, data=None)
            url = response.json()["url"]
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.warning(f"Error uploading {kind.value} image: {e}")
            return ServiceResult.failure(UploadError(str(e) or "Upload failed"), data=None)

        return ServiceResult.success(url)
