# =============================================================================
# app/routers/comments.py - Comment Endpoints
# =============================================================================
# GET  /api/posts/{post_id}/comments  -> comments of a post, oldest first
# POST /api/posts/{post_id}/comments  -> add a comment (text required)
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import CommentServiceDep
from core.models.comment import Comment, CommentCreate

router = APIRouter()


@router.get("/{post_id}/comments", response_model=list[Comment])
async def list_comments(
    post_id: Annotated[str, Path(description="Post id")],
    comments: CommentServiceDep,
):
    """List the comments of a post in the order they were written."""
    return comments.list_comments(post_id)


@router.post(
    "/{post_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: Annotated[str, Path(description="Post id")],
    request: CommentCreate,
    comments: CommentServiceDep,
):
    """
    Add a comment to a post.

    `content` and `userId` are required; `imageUrl` is optional and cannot
    replace the text.
    """
    return comments.create_comment(
        post_id=post_id,
        user_id=request.user_id,
        content=request.content,
        image_url=request.image_url,
    )
