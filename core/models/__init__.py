# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the schemas shared by the API and the API client:
# - profile.py: User, Profile and the joined author projections
# - post.py: Post create/response schemas
# - comment.py: Comment create/response schemas
# - media.py: Image kinds and upload validation rules
# - result.py: ServiceResult (data, error) pair
#
# These models define the "contract" between API and clients.
# =============================================================================

from .comment import Comment, CommentCreate
from .media import (
    ALLOWED_IMAGE_TYPES,
    MAX_IMAGE_SIZE_BYTES,
    ImageKind,
    ImageValidation,
    file_extension,
    validate_image,
)
from .post import Post, PostCreate
from .profile import AuthorProjection, CurrentUserResponse, PostAuthor, Profile, User
from .result import ServiceResult

__all__ = [
    # Identity
    "AuthorProjection",
    "CurrentUserResponse",
    "PostAuthor",
    "Profile",
    "User",
    # Posts
    "Post",
    "PostCreate",
    # Comments
    "Comment",
    "CommentCreate",
    # Media
    "ALLOWED_IMAGE_TYPES",
    "MAX_IMAGE_SIZE_BYTES",
    "ImageKind",
    "ImageValidation",
    "file_extension",
    "validate_image",
    # Results
    "ServiceResult",
]
