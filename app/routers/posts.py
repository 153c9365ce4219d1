# =============================================================================
# app/routers/posts.py - Post Endpoints
# =============================================================================
# GET  /api/posts  -> every post, newest first, with author projection
# POST /api/posts  -> create a post with text, an image, or both
# =============================================================================

import logging

from fastapi import APIRouter, status

from app.dependencies import PostServiceDep
from core.models.post import Post, PostCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[Post])
async def list_posts(posts: PostServiceDep):
    """
    List all posts.

    Ordered by creation time, newest first. Each post embeds its author's
    username and avatar under `profiles`.
    """
    return posts.list_posts()


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(request: PostCreate, posts: PostServiceDep):
    """
    Create a post.

    Requires `userId` and at least one of `content` or `imageUrl`
    (non-blank). Blank fields are stored as null.

    Returns 400 when the rule is broken; nothing is written in that case.
    """
    return posts.create_post(
        user_id=request.user_id,
        content=request.content,
        image_url=request.image_url,
    )
