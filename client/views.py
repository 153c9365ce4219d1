# =============================================================================
# client/views.py - Feed & Comment Thread View State
# =============================================================================
# State holders for a posts feed and for the comments under one post.
#
# Each user action issues its requests one after another: upload the image
# (if any), create the item, then refetch the list. The refetch only starts
# after the create has returned, so the new item is always in the list that
# gets rendered.
#
# close() marks the view as gone. Requests already in flight still finish,
# but their results no longer touch the state.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable

from client.api import CommentsClient, ImageFile, PostsClient, UploadsClient
from core.models.comment import Comment
from core.models.media import ImageKind
from core.models.post import Post
from core.models.result import ServiceResult
from lib.utils import is_blank

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Any], None]


class _View:
    """Shared state plumbing: guarded updates and change listeners."""

    def __init__(self):
        self.loading = False
        self.submitting = False
        self.error: Exception | None = None
        self._closed = False
        self._listeners: list[ChangeListener] = []

    @property
    def closed(self) -> bool:
        return self._closed

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        """Call `listener(view)` after every state change; returns a remover."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()

    def _update(self, **changes: Any) -> None:
        if self._closed:
            return
        for name, value in changes.items():
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener(self)


class Feed(_View):
    """The list of posts plus the "new post" form."""

    def __init__(self, posts: PostsClient, uploads: UploadsClient | None = None):
        super().__init__()
        self._posts = posts
        self._uploads = uploads
        self.posts: list[Post] = []

    def refresh(self) -> ServiceResult[list[Post]]:
        """Reload the posts; on failure the list is emptied and `error` set."""
        self._update(loading=True, error=None)
        result = self._posts.list()
        if not result.ok:
            logger.warning(f"Error fetching posts: {result.error}")
        self._update(posts=result.data, error=result.error, loading=False)
        return result

    def submit(
        self,
        user_id: str,
        content: str | None = None,
        image: ImageFile | None = None,
    ) -> ServiceResult[Post | None]:
        """
        Upload the optional image, create the post, then refresh the feed.

        Stops at the first failing step and records its error.
        """
        self._update(submitting=True, error=None)

        image_url = None
        if image is not None:
            if self._uploads is None:
                raise RuntimeError("Feed was created without an UploadsClient")
            uploaded = self._uploads.upload(image, user_id, ImageKind.POST)
            if not uploaded.ok:
                self._update(error=uploaded.error, submitting=False)
                return ServiceResult.failure(uploaded.error, data=None)
            image_url = uploaded.data

        created = self._posts.create(user_id, content=content, image_url=image_url)
        if not created.ok:
            self._update(error=created.error, submitting=False)
            return created

        self.refresh()
        self._update(submitting=False)
        return created


class CommentThread(_View):
    """The comments under one post plus the reply form."""

    def __init__(
        self,
        post_id: str,
        comments: CommentsClient,
        uploads: UploadsClient | None = None,
    ):
        super().__init__()
        self.post_id = post_id
        self._comments = comments
        self._uploads = uploads
        self.comments: list[Comment] = []

    def refresh(self) -> ServiceResult[list[Comment]]:
        self._update(loading=True, error=None)
        result = self._comments.list_by_post(self.post_id)
        if not result.ok:
            logger.warning(f"Error fetching comments for post {self.post_id}: {result.error}")
        self._update(comments=result.data, error=result.error, loading=False)
        return result

    def submit(
        self,
        user_id: str,
        content: str | None,
        image: ImageFile | None = None,
    ) -> ServiceResult[Comment | None]:
        """
        Upload the optional image, add the comment, then refresh.

        Blank text is rejected before the image is uploaded.
        """
        self._update(submitting=True, error=None)

        image_url = None
        if image is not None and not is_blank(content):
            if self._uploads is None:
                raise RuntimeError("CommentThread was created without an UploadsClient")
            uploaded = self._uploads.upload(image, user_id, ImageKind.COMMENT)
            if not uploaded.ok:
                self._update(error=uploaded.error, submitting=False)
                return ServiceResult.failure(uploaded.error, data=None)
            image_url = uploaded.data

        created = self._comments.create(self.post_id, user_id, content, image_url=image_url)
        if not created.ok:
            self._update(error=created.error, submitting=False)
            return created

        self.refresh()
        self._update(submitting=False)
        return created
